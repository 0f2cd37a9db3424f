# Area: Quiz
"""
word_conquest._quiz.identity — Opponent name generator
======================================================

Draws display names for simulated opponents from weighted locale
pools and avoids handing out the same name twice in a session.
"""

import logging
import random
from typing import FrozenSet, Optional, Set

logger = logging.getLogger("word_conquest.identity")

CHINESE_SURNAMES = (
    "张", "王", "李", "赵", "刘", "陈", "杨", "黄", "周", "吴",
    "徐", "孙", "马", "朱", "胡", "郭", "何", "高", "林", "郑",
)
CHINESE_GIVEN_NAMES = (
    "伟", "芳", "娜", "敏", "静", "丽", "强", "磊", "军", "洋",
    "勇", "艳", "杰", "娟", "涛", "明", "超", "秀英", "霞", "平",
    "刚", "玉兰", "萍", "飞", "建华", "爱华", "小燕", "志强", "海燕", "晨",
)
ENGLISH_FIRST_NAMES = (
    "Alex", "Emma", "Jack", "Sophia", "Oliver", "Mia", "William", "Charlotte",
    "James", "Amelia", "Benjamin", "Harper", "Lucas", "Evelyn", "Henry", "Abigail",
)
ENGLISH_LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
)
JAPANESE_NAMES = ("佐藤健", "鈴木花子", "高橋雄", "田中美咲", "伊藤誠", "渡辺愛")
KOREAN_NAMES = ("김민준", "이서연", "박지호", "최지아", "정하준", "강미나")

# Cumulative category bounds: 60% Chinese, 30% English, 10% other
CHINESE_BOUND = 0.6
ENGLISH_BOUND = 0.9

MAX_CHINESE_LENGTH = 4
MAX_ATTEMPTS = 10


class NameGenerator:
    """Issues opponent names, remembering which ones were already used."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._issued: Set[str] = set()

    @property
    def issued(self) -> FrozenSet[str]:
        return frozenset(self._issued)

    def next(self) -> str:
        """
        Return a name not issued before in this session.

        After MAX_ATTEMPTS retries that all collide the memory is cleared and the next
        draw is accepted as is, so small pools cannot livelock.
        """
        attempts = 0
        name = self._draw()
        while name in self._issued:
            attempts += 1
            if attempts > MAX_ATTEMPTS:
                logger.debug(f"Name pool exhausted after {MAX_ATTEMPTS} retries, resetting")
                self._issued.clear()
                name = self._draw()
                break
            name = self._draw()

        self._issued.add(name)
        return name

    def reset(self) -> None:
        self._issued.clear()

    def _draw(self) -> str:
        category = self._rng.random()
        if category < CHINESE_BOUND:
            return self._chinese_name()
        if category < ENGLISH_BOUND:
            first = self._rng.choice(ENGLISH_FIRST_NAMES)
            last = self._rng.choice(ENGLISH_LAST_NAMES)
            return f"{first} {last}"
        if self._rng.random() > 0.5:
            return self._rng.choice(JAPANESE_NAMES)
        return self._rng.choice(KOREAN_NAMES)

    def _chinese_name(self) -> str:
        surname = self._rng.choice(CHINESE_SURNAMES)
        given = self._rng.choice(CHINESE_GIVEN_NAMES)
        # Optionally a second given name, never more than four characters total
        if self._rng.random() > 0.5 and len(surname) + len(given) <= 3:
            second = self._rng.choice(CHINESE_GIVEN_NAMES)
            if len(surname) + len(given) + len(second) <= MAX_CHINESE_LENGTH:
                return surname + given + second
        return surname + given
