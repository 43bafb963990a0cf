# leafkit/cli/prompts.py
from __future__ import annotations
from typing import Protocol

__all__ = ["Confirm", "stdinConfirm", "alwaysYes"]



class Confirm(Protocol):
    def __call__(self, message: str, default: bool = False) -> bool: ...



def stdinConfirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal; empty answer or EOF picks `default`."""
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{message} {suffix} ").strip().lower()
    except EOFError:
        return default
    if not answer:
        return default
    return answer in ("y", "yes")



def alwaysYes(message: str, default: bool = False) -> bool:
    return True
