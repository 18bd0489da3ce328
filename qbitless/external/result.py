from dataclasses import dataclass
from typing import Optional


@dataclass
class CommandResult:
    error: Optional[str] = None
    success: bool = True
