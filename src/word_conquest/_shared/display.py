# Area: Shared
"""
word_conquest._shared.display — Terminal rendering
==================================================

Plain-text views of a store snapshot for the CLI. Works on snapshots
only, never on live store objects.
"""

from __future__ import annotations
from typing import List, Optional

from ..types import GameSnapshot, QuizSnapshot

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"       # Owned territory
YELLOW = "\033[33m"      # Treasure, coins
CYAN = "\033[36m"        # Items
RED = "\033[31m"         # Enemy, low energy
DIM = "\033[2m"          # Unexplored
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# CELL GLYPHS
# ══════════════════════════════════════════════════════════════

UNEXPLORED_GLYPH = "·"
OWNED_GLYPH = "■"
ENEMY_GLYPH = "▲"

# Explored cells show what was found
CONTENT_GLYPHS = {
    "empty": " ",
    "treasure": "$",
    "item": "i",
    "coins": "c",
}

DEFAULT_VIEWPORT = 15


def _paint(text: str, color: str, use_color: bool) -> str:
    return f"{color}{text}{RESET}" if use_color else text


def cell_glyph(cell: dict, use_color: bool = False) -> str:
    status = cell["status"]
    if status == "unexplored":
        return _paint(UNEXPLORED_GLYPH, DIM, use_color)
    if status == "owned":
        return _paint(OWNED_GLYPH, GREEN, use_color)
    if status == "enemy":
        return _paint(ENEMY_GLYPH, RED, use_color)
    glyph = CONTENT_GLYPHS.get(cell["content"], "?")
    color = CYAN if cell["content"] == "item" else YELLOW
    return _paint(glyph, color, use_color) if glyph.strip() else glyph


def render_status(snapshot: GameSnapshot, use_color: bool = False) -> str:
    """One-line player summary."""
    player = snapshot["player"]
    energy = f"{player['energy']}/{player['max_energy']}"
    if player["energy"] == 0:
        energy = _paint(energy, RED, use_color)
    return (
        f"{player['name']} [{player['grade']}] │ energy {energy} │ "
        f"territory {player['territory']} │ coins {player['coins']} │ "
        f"mode {snapshot['mode']}"
    )


def render_map(
    snapshot: GameSnapshot,
    top: int = 0,
    left: int = 0,
    span: int = DEFAULT_VIEWPORT,
    use_color: bool = False,
) -> str:
    """
    Render a square window of the map.

    The snapshot must have been taken with ``include_cells=True``.
    """
    grid = snapshot["map"]
    cells = grid["cells"]
    if not cells:
        return "(no map)"

    size = grid["size"]
    top = max(0, min(top, size - 1))
    left = max(0, min(left, size - 1))
    bottom = min(size, top + span)
    right = min(size, left + span)

    lines: List[str] = []
    header = "     " + "".join(f"{c % 100:>3}" for c in range(left, right))
    lines.append(header)
    for r in range(top, bottom):
        row = "".join(f"  {cell_glyph(cells[r][c], use_color)}" for c in range(left, right))
        lines.append(f"{r:>4} {row}")
    return "\n".join(lines)


def _bar(value: int, total: int, width: int = 10) -> str:
    filled = 0 if total <= 0 else round(width * value / total)
    return "█" * filled + "░" * (width - filled)


def render_quiz(quiz: Optional[QuizSnapshot], use_color: bool = False) -> str:
    """Current question, options and both progress bars."""
    if quiz is None:
        return "(no quiz)"

    count = quiz["question_count"]
    lines = [
        f"Quiz #{quiz['quiz_id']} vs {quiz['opponent_name']} ({quiz['opponent_tier']})"
        f" │ {quiz['time_left']}s left",
        f"  you      {_bar(quiz['player_progress'], count)} {quiz['player_progress']}/{count}",
        f"  opponent {_bar(quiz['opponent_progress'], count)} "
        f"{quiz['opponent_progress']}/{count} ({quiz['opponent_status']})",
    ]

    if quiz["status"] == "completed":
        won = quiz["winner"] == "player"
        verdict = "You won the territory!" if won else "The opponent won."
        lines.append(_paint(verdict, GREEN if won else RED, use_color))
        return "\n".join(lines)

    question = quiz["question"]
    if question is not None:
        lines.append("")
        lines.append(f"  Q{quiz['current_question'] + 1}: {question['word']}")
        for i, option in enumerate(question["options"]):
            lines.append(f"    {i}) {option}")
    return "\n".join(lines)
