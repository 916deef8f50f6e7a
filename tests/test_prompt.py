"""Tests for askpass prompt classification."""
from __future__ import annotations

import logging

import pytest

from qsshaskpass.askpass.prompt import (
    PROMPT_RULES,
    UNPARSED,
    ClassificationResult,
    PromptClassifier,
    RequestKind,
    classify,
)

SECRET = RequestKind.SECRET
PLAIN = RequestKind.PLAIN_TEXT
CONFIRM = RequestKind.CONFIRMATION


PROMPTS = [
    # (rule name, prompt, identifier, kind, skip_store)
    ("ssh_password", "alice@example.com's password: ", "alice@example.com", SECRET, False),
    ("ssh_password", "bob@10.0.0.1's password (JPAKE): ", "bob@10.0.0.1", SECRET, False),
    ("ssh_password_change", "Enter alice@example.com's old password: ", "alice@example.com", SECRET, True),
    ("ssh_password_change", "Retype alice@example.com's new password: ", "alice@example.com", SECRET, True),
    ("ssh_key_passphrase", "Enter passphrase for key '/home/u/.ssh/id_ed25519': ",
     "/home/u/.ssh/id_ed25519", SECRET, False),
    ("ssh_key_passphrase", "Enter passphrase for RSA key '/home/u/.ssh/identity': ",
     "/home/u/.ssh/identity", SECRET, False),
    ("ssh_add_passphrase", "Enter passphrase for /home/u/.ssh/id_rsa: ", "/home/u/.ssh/id_rsa", SECRET, False),
    ("ssh_add_passphrase", "Enter passphrase for /home/u/.ssh/id_rsa (will confirm each use): ",
     "/home/u/.ssh/id_rsa", SECRET, False),
    ("ssh_add_bad_passphrase", "Bad passphrase, try again for /home/u/.ssh/id_rsa: ",
     "/home/u/.ssh/id_rsa", SECRET, True),
    ("ssh_add_bad_passphrase", "Bad passphrase, try again for id (will confirm each use): ", "id", SECRET, True),
    ("pkcs11_pin", "Enter PIN for 'Token#1': ", "Token#1", SECRET, False),
    ("mux_shared_connection", "Allow shared connection to example.com? ", "example.com", CONFIRM, True),
    ("mux_shared_connection", "Terminate shared connection to example.com? ", "example.com", CONFIRM, True),
    ("mux_open", "Open 127.0.0.1:8080 on example.com", "127.0.0.1:8080 on example.com", CONFIRM, True),
    ("mux_forward", "Allow forward to host:22? ", "host:22", CONFIRM, True),
    ("mux_disable", "Disable further multiplexing on shared connection to example.com? ",
     "example.com", CONFIRM, True),
    ("agent_key_use", "Allow use of key /home/u/.ssh/id_rsa\nKey fingerprint SHA256:abcdef.",
     "/home/u/.ssh/id_rsa", CONFIRM, True),
    ("agent_add_key", "Add key /home/u/.ssh/id_ed25519 (u@laptop) to agent?",
     "/home/u/.ssh/id_ed25519", CONFIRM, True),
    ("git_imap_password", "Password (alice@imap.example.com): ", "alice@imap.example.com", SECRET, False),
    ("git_username", "Username: ", None, PLAIN, True),
    ("git_password", "Password: ", None, SECRET, True),
    ("git_username_for", "Username for 'https://github.com': ", "https://github.com", PLAIN, False),
    ("git_password_for", "Password for 'https://alice@github.com': ", "https://alice@github.com", SECRET, False),
    ("git_lfs_username", 'Username for "https://lfs.example.com"', "https://lfs.example.com", PLAIN, False),
    ("git_lfs_password", 'Password for "https://lfs.example.com"', "https://lfs.example.com", SECRET, False),
    ("hg_password", "http://hg.example.com/repo's password: ", "http://hg.example.com/repo", SECRET, False),
    ("hg_password", "alice's password: ", "alice", SECRET, False),
]


@pytest.mark.parametrize("rule_name, prompt, identifier, kind, skip_store", PROMPTS)
def test_classify_prompt(rule_name, prompt, identifier, kind, skip_store) -> None:
    classifier = PromptClassifier()
    assert classifier.match_rule(prompt).name == rule_name
    assert classifier.classify(prompt) == ClassificationResult(identifier, kind, skip_store)


def test_every_rule_is_covered() -> None:
    covered = {p[0] for p in PROMPTS}
    assert covered == {rule.name for rule in PROMPT_RULES}


def test_rule_order() -> None:
    names = [rule.name for rule in PROMPT_RULES]
    assert len(names) == 20
    assert names[0] == "ssh_password"
    assert names[-1] == "hg_password"
    assert names.index("ssh_add_passphrase") < names.index("ssh_add_bad_passphrase")
    assert names.index("git_username") < names.index("git_username_for")


def test_bad_passphrase_is_not_a_first_attempt() -> None:
    result = classify("Bad passphrase, try again for id: ")
    assert PromptClassifier().match_rule("Bad passphrase, try again for id: ").name == "ssh_add_bad_passphrase"
    assert result.identifier == "id"
    assert result.skip_store is True


def test_specific_rules_win_over_generic_password() -> None:
    # Also ends in "'s password: " but belongs to the ssh rule
    assert PromptClassifier().match_rule("alice@host's password: ").name == "ssh_password"
    # Password change must never be served from the store
    assert classify("Enter alice@host's new password: ").skip_store is True


def test_pin_prompt_may_carry_a_prefix() -> None:
    result = classify("Smartcard: Enter PIN for 'Token#1': ")
    assert result == ClassificationResult("Token#1", SECRET, False)


def test_bare_open_has_no_identifier() -> None:
    result = classify("Open ")
    assert result == ClassificationResult(None, CONFIRM, True)


def test_empty_capture_becomes_no_identifier() -> None:
    result = classify("Enter passphrase for : ")
    assert result.identifier is None
    assert result.uses_store is False


def test_prompts_must_match_completely() -> None:
    # Trailing space missing: not the git prompt, falls through to default
    assert classify("Username:") == UNPARSED
    assert classify("Password: extra") == UNPARSED


def test_classify_is_pure() -> None:
    classifier = PromptClassifier()
    prompt = "Enter passphrase for key '/k': "
    first = classifier.classify(prompt)
    classifier.classify("Username: ")
    assert classifier.classify(prompt) == first
    assert classify(prompt) == first


def test_unmatched_prompt_logs_once(caplog) -> None:
    log = logging.getLogger("test.classifier")
    classifier = PromptClassifier(logger=log)

    with caplog.at_level(logging.WARNING, logger="test.classifier"):
        result = classifier.classify("What is your quest?")

    assert result == ClassificationResult(None, SECRET, False)
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "What is your quest?" in warnings[0].getMessage()


def test_matched_prompt_does_not_warn(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        classify("Username: ")
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_custom_rule_table() -> None:
    classifier = PromptClassifier(rules=PROMPT_RULES[-1:])
    assert classifier.classify("alice@host's password: ").identifier == "alice@host"
    assert classifier.classify("Username: ") == UNPARSED


def test_agent_key_use_with_ssh_agent_wording() -> None:
    prompt = "Allow use of key /home/u/.ssh/id_rsa?\nKey fingerprint SHA256:abcdef."
    assert classify(prompt) == ClassificationResult("/home/u/.ssh/id_rsa", CONFIRM, True)


def test_disable_multiplexing_target_excludes_question_mark() -> None:
    result = classify("Disable further multiplexing on shared connection to host? ")
    assert result.identifier == "host"


@pytest.mark.parametrize("prompt, expected", [
    ("Username: \n", ClassificationResult(None, PLAIN, True)),
    ("alice@host's password: \n", ClassificationResult("alice@host", SECRET, False)),
])
def test_one_trailing_newline_is_ignored(prompt, expected) -> None:
    assert classify(prompt) == expected


def test_two_trailing_newlines_do_not_match() -> None:
    assert classify("Username: \n\n") == UNPARSED


def test_pin_prompt_prefix_may_span_lines() -> None:
    result = classify("Token inserted\nEnter PIN for 'Token#1': ")
    assert result == ClassificationResult("Token#1", SECRET, False)
