"""
Seedable source of random values for fixture data.

Every draw the payload synthesizer and seeder make goes through a
RandomSource, so tests can pin the output with a fixed seed.
"""

import random
import string
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

ALPHANUMERIC = string.ascii_letters + string.digits
HEX_DIGITS = "0123456789abcdef"

PRODUCT_ADJECTIVES = [
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Generic", "Handcrafted",
    "Handmade", "Licensed", "Refined", "Unbranded", "Tasty", "Modern",
]
PRODUCT_MATERIALS = [
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Metal", "Soft", "Fresh", "Frozen", "Bronze", "Silk", "Marble",
]
PRODUCT_NAMES = [
    "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball", "Gloves",
    "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels", "Soap", "Tuna",
    "Chicken", "Fish", "Cheese", "Bacon", "Pizza", "Salad", "Sausages",
]
FIRST_NAMES = [
    "John", "Jane", "Michael", "Sarah", "David", "Emily", "Robert", "Jessica",
    "William", "Ashley", "James", "Amanda", "Daniel", "Michelle", "Matthew",
    "Laura", "Kevin", "Rachel", "Brian", "Samantha", "George", "Kelly",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Martinez", "Wilson", "Anderson", "Taylor", "Moore", "Jackson",
    "Martin", "Lee", "Thompson", "White", "Harris", "Clark", "Lewis", "Walker",
]
EMAIL_DOMAINS = ["gmail.com", "yahoo.com", "hotmail.com", "outlook.com"]
PHONE_FORMATS = ["(###) ###-####", "###-###-####", "###.###.####", "1-###-###-####"]


class RandomSource:
    """Random draws used to build webhook fixtures."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def integer(self, min_value: int, max_value: int) -> int:
        """Uniform integer in [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError(f"min_value {min_value} is greater than max_value {max_value}")
        return self._random.randint(min_value, max_value)

    def boolean(self) -> bool:
        return self._random.random() < 0.5

    def _string(self, alphabet: str, length: int) -> str:
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")
        return "".join(self._random.choice(alphabet) for _ in range(length))

    def alphanumeric(self, length: int) -> str:
        return self._string(ALPHANUMERIC, length)

    def hexadecimal(self, length: int) -> str:
        return self._string(HEX_DIGITS, length)

    def numeric(self, length: int) -> str:
        return self._string(string.digits, length)

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("cannot choose from an empty sequence")
        return self._random.choice(options)

    def _date_within(self, window: timedelta, now: Optional[datetime]) -> datetime:
        if window <= timedelta(0):
            raise ValueError("date window must be positive")
        if now is None:
            now = datetime.now(timezone.utc)
        return now - window * self._random.random()

    def recent_date(self, days: float = 1, now: Optional[datetime] = None) -> datetime:
        """A moment uniformly within the last `days` days."""
        return self._date_within(timedelta(days=days), now)

    def past_date(self, years: float = 1, now: Optional[datetime] = None) -> datetime:
        """A moment uniformly within the last `years` years."""
        return self._date_within(timedelta(days=365 * years), now)

    def product_name(self) -> str:
        return " ".join(
            self.choice(pool) for pool in (PRODUCT_ADJECTIVES, PRODUCT_MATERIALS, PRODUCT_NAMES)
        )

    def full_name(self) -> str:
        return f"{self.choice(FIRST_NAMES)} {self.choice(LAST_NAMES)}"

    def email(self, name: Optional[str] = None) -> str:
        if name is None:
            name = self.full_name()
        first, _, last = name.partition(" ")
        local = self.choice([
            f"{first}.{last}",
            f"{first}_{last}",
            f"{first}{self.integer(1, 99)}",
        ])
        return f"{local}@{self.choice(EMAIL_DOMAINS)}".lower()

    def phone_number(self) -> str:
        pattern = self.choice(PHONE_FORMATS)
        return "".join(self.numeric(1) if ch == "#" else ch for ch in pattern)

    def ipv4(self) -> str:
        return ".".join(str(self.integer(0, 255)) for _ in range(4))
