"""
Terminal fallback for askpass requests.

Everything is written to stderr; stdout is reserved for the answer.
"""

from __future__ import annotations

import click

from .base import AskpassResponse, Interaction


class ConsoleInteraction(Interaction):
    """Prompts on the controlling terminal via click."""

    def present_secret_prompt(self, text: str, allow_remember: bool) -> AskpassResponse:
        try:
            value = click.prompt(
                text.rstrip(),
                default="",
                show_default=False,
                hide_input=True,
                prompt_suffix=" ",
                err=True,
            )
            remember = allow_remember and click.confirm(
                "Remember password?", default=False, err=True
            )
        except click.Abort:
            click.echo(err=True)
            return AskpassResponse(success=False)

        return AskpassResponse(success=True, value=value, remember=remember)

    def present_confirmation(self, text: str) -> bool:
        try:
            return click.confirm(text.rstrip(), default=False, prompt_suffix=" ", err=True)
        except click.Abort:
            click.echo(err=True)
            return False
