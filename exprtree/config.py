# config.py

from dataclasses import dataclass
from typing import Tuple


# ====== コンフィグ ======
@dataclass
class CalculatorConfig:
    integer_tolerance: float = 1e-10   # results this close to an integer print as one
    decimal_places: int = 6
    exit_commands: Tuple[str, ...] = ('exit', 'quit')
    prompt: str = '> '
    show_traversals: bool = False
    show_tree: bool = False
