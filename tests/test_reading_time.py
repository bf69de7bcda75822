"""
tests/test_reading_time.py
"""
from __future__ import annotations

from inkwell.utils.reading_time import (
    calculate_reading_time,
    format_reading_time,
)


def _words(count: int) -> str:
    return " ".join(["word"] * count)


def test_empty_content_is_less_than_a_minute():
    result = calculate_reading_time("")
    assert result.words == 0
    assert result.minutes == 0
    assert result.text == "Less than 1 min"


def test_minutes_round_up():
    assert calculate_reading_time(_words(1)).minutes == 1
    assert calculate_reading_time(_words(225)).minutes == 1
    assert calculate_reading_time(_words(226)).minutes == 2
    assert calculate_reading_time(_words(900)).text == "4 min read"


def test_html_tags_are_not_counted():
    html = "<h2>Two words</h2>\n<p>and <strong>three</strong> more</p>"
    assert calculate_reading_time(html).words == 5


def test_custom_words_per_minute():
    result = calculate_reading_time(_words(300), words_per_minute=100)
    assert result.minutes == 3
    assert result.milliseconds == 3 * 60 * 1000


def test_format_reading_time_labels():
    assert format_reading_time(0) == "Less than 1 min"
    assert format_reading_time(1) == "1 min read"
    assert format_reading_time(12) == "12 min read"
