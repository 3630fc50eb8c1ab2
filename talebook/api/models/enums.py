"""Shared enums for API models."""

from enum import Enum


class AgeRange(str, Enum):
    """Reader age band a tale is written for."""

    AGES_2_4 = "2-4"
    AGES_5_7 = "5-7"
    AGES_8_10 = "8-10"
    AGES_11_13 = "11-13"


class Topic(str, Enum):
    """Subject category of a tale."""

    ADVENTURE = "adventure"
    FANTASY = "fantasy"
    ANIMALS = "animals"
    FRIENDSHIP = "friendship"
    NATURE = "nature"
    SPACE = "space"
    SCIENCE = "science"
    HISTORY = "history"
    SPORTS = "sports"
