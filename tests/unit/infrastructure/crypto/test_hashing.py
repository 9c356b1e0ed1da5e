"""
Unit tests for the SHA-256 digest used by hash columns.
"""

import re

import pytest

from note_vault.infrastructure.crypto import digest


@pytest.mark.unit
def test_known_vector():
    assert digest("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.mark.unit
def test_stable_across_calls():
    assert digest("Work") == digest("Work")


@pytest.mark.unit
def test_lowercase_hex_of_fixed_length():
    assert re.fullmatch(r"[0-9a-f]{64}", digest("Work"))


@pytest.mark.unit
def test_distinct_inputs_differ():
    assert digest("Work") != digest("work")


@pytest.mark.unit
def test_non_string_is_stringified():
    assert digest(7) == digest("7")
