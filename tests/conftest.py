"""Shared fixtures: a small in-memory dictionary and English sample texts."""

import re

import pytest

from cipherbreaker.core.config import Settings
from cipherbreaker.services.dictionary import Dictionary

# Every word of both texts is in the test dictionary
MEETING_TEXT = (
    "THE SECRET MEETING WILL TAKE PLACE AT THE OLD BRIDGE NEAR THE RIVER AT MIDNIGHT. "
    "BRING THE MONEY AND THE DOCUMENTS AND TELL NO ONE ABOUT THIS PLAN. "
    "THE GUARDS CHANGE THEIR WATCH AT TWELVE AND WE MUST CROSS BEFORE THEY RETURN. "
    "IF ANYTHING GOES WRONG WE WILL MEET AGAIN AT DAWN IN THE MARKET SQUARE BY THE FOUNTAIN."
)

PEOPLE_TEXT = (
    "THE PEOPLE OF THE WORLD KNOW THAT THE TIME HAS COME FOR ALL OF US TO WORK "
    "TOGETHER AND MAKE A NEW HOME FOR OUR CHILDREN WHERE THEY CAN LIVE IN PEACE "
    "AND BE HAPPY"
)

EXTRA_WORDS = (
    "people world know that time has come for all us to work together make new "
    "home our children where they can live peace be happy attack dawn message "
    "meet me lemon key cipher code"
).split()


@pytest.fixture(scope="session")
def word_list():
    return sorted(set(re.findall(r"[A-Z]+", MEETING_TEXT)) | {w.upper() for w in EXTRA_WORDS})


@pytest.fixture(scope="session")
def dictionary(word_list):
    return Dictionary.from_words(word_list)


@pytest.fixture
def settings():
    return Settings(vigenere_trial_budget=2000, default_timeout_seconds=120.0)


@pytest.fixture
def meeting_text():
    return MEETING_TEXT


@pytest.fixture
def people_text():
    return PEOPLE_TEXT
