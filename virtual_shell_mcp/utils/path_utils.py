"""Path helpers for the virtual file system.

Virtual paths are plain strings: the root is ``~`` and every other path is
``~/seg1/.../segN``. None of these helpers touch the VFS; existence checks
are left to the caller.
"""

ROOT = "~"
SEPARATOR = "/"


def path_segments(path: str) -> list[str]:
    """Returns the segments of a normalized path, excluding the root marker."""
    if path == ROOT:
        return []
    return [segment for segment in path.split(SEPARATOR)[1:] if segment]


def join_segments(segments: list[str]) -> str:
    if not segments:
        return ROOT
    return ROOT + SEPARATOR + SEPARATOR.join(segments)


def resolve_path(base: str, target: str) -> str:
    """
    Resolves a user-supplied target against the current directory.

    The result is always a normalized path: no ``.`` or ``..`` segments and no
    double separators. ``..`` above the root is clamped at the root. The
    function never raises and does not check that the path exists.

    Args:
        base: The current directory, a normalized path.
        target: The path typed by the user, relative or rooted at ``~/``.

    Returns:
        The normalized absolute path.
    """
    if target == ROOT:
        return ROOT

    if target.startswith(ROOT + SEPARATOR):
        segments: list[str] = []
        remainder = target[len(ROOT) + 1:]
    else:
        segments = path_segments(base)
        remainder = target

    for segment in remainder.split(SEPARATOR):
        match segment:
            case "" | ".":
                continue
            case "..":
                if segments:
                    segments.pop()
            case _:
                segments.append(segment)

    return join_segments(segments)


def child_path(parent: str, name: str) -> str:
    return f"{parent}{SEPARATOR}{name}"


def ancestor_chain(path: str) -> list[str]:
    """Returns every ancestor of a path from the root down, excluding the path itself."""
    segments = path_segments(path)
    return [join_segments(segments[:depth]) for depth in range(len(segments))]


def is_within(path: str, ancestor: str) -> bool:
    """True if ``path`` equals ``ancestor`` or lies below it."""
    if ancestor == ROOT:
        return path == ROOT or path.startswith(ROOT + SEPARATOR)
    return path == ancestor or path.startswith(ancestor + SEPARATOR)
