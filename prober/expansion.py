# ============================================================================
# COMMAND EXPANSION
# ============================================================================
# STATUS: Prober - Exec probe command templating
# PURPOSE: Expand $(VAR) references against a container's literal env
# CREATED: 12 OCT 2026
# ============================================================================
"""
Command Expansion

Exec probe commands may reference container environment variables with
$(NAME). Only literal env values are substituted:

    $(NAME)  -> value of NAME, or "$(NAME)" unchanged when NAME is unknown
    $$       -> "$"
    $x       -> "$x" unchanged
    $(       -> "$(" unchanged when the reference is never closed
"""

from typing import Callable, Dict, Iterable, List

from core.models import EnvVar


def _mapping_for(*contexts: Dict[str, str]) -> Callable[[str], str]:
    def mapping(name: str) -> str:
        for context in contexts:
            if name in context:
                return context[name]
        return f"$({name})"
    return mapping


def _read_variable_name(text: str):
    """
    Inspect what follows a '$'.

    Returns (read, is_var, advance): the variable name or literal text,
    whether it names a variable, and how many characters were consumed.
    """
    first = text[0]
    if first == "$":
        return "$", False, 1
    if first == "(":
        closing = text.find(")", 1)
        if closing != -1:
            return text[1:closing], True, closing + 1
        return "$(", False, 1
    return "$" + first, False, 1


def expand(text: str, mapping: Callable[[str], str]) -> str:
    """Expand variable references in text using mapping."""
    parts: List[str] = []
    checkpoint = 0
    cursor = 0
    while cursor < len(text):
        if text[cursor] == "$" and cursor + 1 < len(text):
            parts.append(text[checkpoint:cursor])
            read, is_var, advance = _read_variable_name(text[cursor + 1:])
            parts.append(mapping(read) if is_var else read)
            cursor += advance
            checkpoint = cursor + 1
        cursor += 1
    parts.append(text[checkpoint:])
    return "".join(parts)


def expand_command_only_static(command: Iterable[str], env: Iterable[EnvVar]) -> List[str]:
    """Expand each command argument against the literal values in env."""
    static_env = {var.name: var.value for var in env if var.value is not None}
    mapping = _mapping_for(static_env)
    return [expand(arg, mapping) for arg in command]


__all__ = ["expand", "expand_command_only_static"]
