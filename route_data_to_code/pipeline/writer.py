"""
Atomic file writer for generated route libraries.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written generated file behind.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path


class CodeWriteError(Exception):
    """Raised when generated code fails validation before being written."""


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_dart: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_dart: Optional validation function for Dart code
        """
        self._validate_dart = validate_dart or self._default_validate_dart

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            CodeWriteError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_dart(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            FileExistsError: If the file already exists
            CodeWriteError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, validate)
        return True

    def _default_validate_dart(self, content: str) -> None:
        """Default Dart validation.

        Raises:
            CodeWriteError: If validation fails
        """
        # Basic structural checks, there is no Dart parser here
        code = _code_outside_literals(content)
        for opening, closing in ("{}", "()", "[]"):
            open_count = code.count(opening)
            close_count = code.count(closing)
            if open_count != close_count:
                raise CodeWriteError(f"Generated Dart code has unbalanced '{opening}{closing}': {open_count} open, {close_count} close")

        if content and "GENERATED CODE - DO NOT MODIFY BY HAND" not in content:
            raise CodeWriteError("Generated Dart code is missing the generated-code header")


def _code_outside_literals(content: str) -> str:
    """
    The characters of content that are Dart code.

    String literal contents (escapes included) and line comments are dropped.
    Expressions interpolated with ${...} count as code again.
    """
    code: list[str] = []
    # Each frame is ("code", brace depth) or ("string", quote, raw)
    frames: list[list] = [["code", 0]]
    i = 0
    n = len(content)
    while i < n:
        frame = frames[-1]
        char = content[i]
        if frame[0] == "code":
            if content.startswith("//", i):
                end = content.find("\n", i)
                i = n if end == -1 else end
                continue
            if char in "'\"":
                quote = char * 3 if content.startswith(char * 3, i) else char
                raw = i > 0 and content[i - 1] == "r" and (i < 2 or not (content[i - 2].isalnum() or content[i - 2] in "_$"))
                frames.append(["string", quote, raw])
                i += len(quote)
                continue
            if char == "{":
                frame[1] += 1
            elif char == "}":
                if frame[1] == 0 and len(frames) > 1:
                    frames.pop()
                    i += 1
                    continue
                frame[1] -= 1
            code.append(char)
            i += 1
        else:
            _, quote, raw = frame
            if char == "\\" and not raw:
                i += 2
            elif content.startswith(quote, i):
                frames.pop()
                i += len(quote)
            elif content.startswith("${", i) and not raw:
                frames.append(["code", 0])
                i += 2
            else:
                i += 1
    return "".join(code)
