"""
Identifier sanitizers.

Every function here is pure and idempotent: feeding a result back in returns
it unchanged, so builders can sanitize without tracking what is already clean.
"""

import re

_COMPONENT_INVALID = re.compile(r"[^A-Za-z0-9_]")
_PROP_INVALID = re.compile(r"[^A-Za-z0-9_$]")
_KEBAB = re.compile(r"-([a-z])")

JS_RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    "await",
})

# Reserved words that have a conventional React spelling
RESERVED_RENAMES: dict[str, str] = {
    "class": "className",
    "for": "htmlFor",
}


def capitalize(value: str) -> str:
    """Uppercase the first character, leave the rest alone."""
    return value[:1].upper() + value[1:]


def sanitize_component_name(name: str) -> str:
    """
    Turn a display name into a PascalCase component identifier.

    Args:
        name: Raw display name ("user card", "123abc")

    Returns:
        Identifier such as "Usercard" or "_123abc"
    """
    sanitized = _COMPONENT_INVALID.sub("", name)
    if not sanitized:
        sanitized = "Component"
    if sanitized[0].isdigit():
        sanitized = "_" + sanitized
    return capitalize(sanitized)


def sanitize_prop_name(name: str) -> str:
    """
    Turn a property key into a JavaScript identifier.

    Kebab-case is camelized, invalid characters are dropped, and reserved
    words are renamed (`class` -> `className`) or prefixed with `_`.
    """
    safe = _KEBAB.sub(lambda m: m.group(1).upper(), name)
    safe = _PROP_INVALID.sub("", safe)
    if not safe:
        return "prop"
    if safe[0].isdigit():
        safe = "_" + safe
    if safe in JS_RESERVED_WORDS:
        safe = RESERVED_RENAMES.get(safe, "_" + safe)
    return safe


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
