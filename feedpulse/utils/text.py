"""
Text metrics for FeedPulse: reading time, sentence statistics and
Flesch-Kincaid reading difficulty.
"""
import math
import re
from dataclasses import dataclass
from typing import Optional

from feedpulse.config import get_config

SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]+')
PARAGRAPH_BREAK_PATTERN = re.compile(r'\n\s*\n')
VOWEL_GROUP_PATTERN = re.compile(r'[aeiouy]+')
NON_ALPHA_PATTERN = re.compile(r'[^a-z]')

# Upper bounds (inclusive) of each Flesch-Kincaid grade band
DIFFICULTY_LEVELS = [
    (5, 'Very Easy'),
    (8, 'Easy'),
    (12, 'Moderate'),
    (15, 'Difficult'),
]


@dataclass
class TextStatistics:
    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    average_words_per_sentence: int = 0


@dataclass
class ReadingDifficulty:
    score: float = 0
    level: str = 'Unknown'


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves upwards (towards positive infinity).

    The builtin ``round`` rounds halves to even, which makes 2.5 minutes
    display as 2.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def count_words(text: Optional[str]) -> int:
    """Number of whitespace-delimited tokens in the text."""
    if not text:
        return 0
    return len(text.split())


def estimate_reading_time(text: Optional[str], words_per_minute: Optional[int] = None) -> int:
    """
    Estimate reading time in whole minutes.

    Args:
        text: Plain text of the article
        words_per_minute: Reading speed, defaults to ``reading.words_per_minute``

    Returns:
        ``ceil(words / words_per_minute)``; empty text reads in 0 minutes
    """
    wpm = words_per_minute if words_per_minute is not None else get_config('reading.words_per_minute', 200)
    return math.ceil(count_words(text) / wpm)


def format_reading_time(minutes: Optional[int]) -> str:
    """Human readable reading time."""
    if not minutes or minutes < 1:
        return 'Less than a minute'
    if minutes == 1:
        return '1 minute'
    return f'{minutes} minutes'


def count_syllables(text: Optional[str]) -> int:
    """
    Approximate the number of syllables in the text.

    Each maximal run of vowels counts as one syllable, a trailing silent ``e``
    is discounted (but not ``-le``), and every word has at least one syllable.
    """
    if not text:
        return 0

    count = 0
    for token in text.lower().split():
        word = NON_ALPHA_PATTERN.sub('', token)
        syllables = len(VOWEL_GROUP_PATTERN.findall(word))

        if len(word) > 3 and word.endswith('e') and not word.endswith('le'):
            syllables -= 1

        count += max(1, syllables)

    return count


def get_text_statistics(text: Optional[str]) -> TextStatistics:
    """
    Compute word, sentence and paragraph counts for the text.

    Args:
        text: Plain text

    Returns:
        TextStatistics, all zero for empty text
    """
    if not text:
        return TextStatistics()

    words = count_words(text)
    sentences = len(SENTENCE_PATTERN.findall(text))
    paragraphs = len(PARAGRAPH_BREAK_PATTERN.findall(text)) + 1

    return TextStatistics(
        word_count=words,
        sentence_count=sentences,
        paragraph_count=paragraphs,
        average_words_per_sentence=int(round_half_up(words / sentences)) if sentences > 0 else 0,
    )


def calculate_reading_difficulty(text: Optional[str]) -> ReadingDifficulty:
    """
    Flesch-Kincaid grade level of the text.

    Args:
        text: Plain text

    Returns:
        ReadingDifficulty with the score rounded to one decimal, or
        ``(0, 'Unknown')`` when there are no words or no sentences
    """
    stats = get_text_statistics(text)
    if stats.word_count == 0 or stats.sentence_count == 0:
        return ReadingDifficulty()

    syllables = count_syllables(text)
    score = (
        0.39 * (stats.word_count / stats.sentence_count)
        + 11.8 * (syllables / stats.word_count)
        - 15.59
    )

    level = 'Very Difficult'
    for upper, name in DIFFICULTY_LEVELS:
        if score <= upper:
            level = name
            break

    return ReadingDifficulty(score=round_half_up(score, 1), level=level)


def create_article_summary(text: Optional[str], sentence_count: int = 3) -> str:
    """
    Extractive summary made of the first few sentences.

    Args:
        text: Plain text
        sentence_count: Number of leading sentences to keep

    Returns:
        The leading sentences joined by a space, or the whole text when it
        has no more than ``sentence_count`` sentences
    """
    if not text:
        return ''

    sentences = SENTENCE_PATTERN.findall(text)
    if len(sentences) <= sentence_count:
        return text

    return ' '.join(sentence.strip() for sentence in sentences[:sentence_count])
