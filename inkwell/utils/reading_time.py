"""Reading time estimates for post content."""
import math
import re
from dataclasses import dataclass

TAG_RE = re.compile(r"<[^>]*>")
DEFAULT_WORDS_PER_MINUTE = 225


@dataclass
class ReadingTime:
    """Reading time estimate."""
    minutes: int
    words: int

    @property
    def milliseconds(self) -> int:
        return self.minutes * 60 * 1000

    @property
    def text(self) -> str:
        return format_reading_time(self.minutes)


def calculate_reading_time(content: str,
                           words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> ReadingTime:
    """Estimate reading time, ignoring HTML markup."""
    plain_text = TAG_RE.sub("", content or "")
    words = len(plain_text.split())
    minutes = math.ceil(words / words_per_minute)
    return ReadingTime(minutes=minutes, words=words)


def format_reading_time(minutes: int) -> str:
    """Human label for a number of minutes."""
    if minutes < 1:
        return "Less than 1 min"
    return f"{minutes} min read"
