"""
Path Resolver Module

Handles path string manipulation for the in-memory filesystem:
- '/'-separated POSIX paths, independent of the host OS
- dirname/basename/extname splitting
- Normalization of '.' and '..' components
- Glob pattern matching with pathname semantics

Author: YSNRFD
Version: 1.0.0
"""

import re
from dataclasses import dataclass
from enum import IntFlag
from functools import lru_cache
from typing import List, Tuple, Iterable


SEPARATOR = '/'


class GlobFlag(IntFlag):
    """Flags accepted by :meth:`PathResolver.fnmatch`."""
    NONE = 0
    NOESCAPE = 0x01   # Backslash is an ordinary character
    PATHNAME = 0x02   # Wildcards never match '/'; '**/' spans directories
    DOTMATCH = 0x04   # Wildcards may match a leading '.'
    CASEFOLD = 0x08   # Case-insensitive match
    EXTGLOB = 0x10    # Enable '{a,b}' alternation


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]

    def __str__(self) -> str:
        if self.is_absolute:
            return '/' + '/'.join(self.components)
        return '/'.join(self.components) if self.components else '.'


class PathResolver:
    """
    Resolves and manipulates filesystem paths.

    Handles:
    - Absolute and relative paths
    - . and .. components
    - Path normalization
    - Glob matching
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath with components
        """
        is_absolute = path.startswith(SEPARATOR)
        components = [c for c in path.split(SEPARATOR) if c and c != '.']
        return ParsedPath(is_absolute=is_absolute, components=components)

    @staticmethod
    def normalize(path: str) -> str:
        """
        Normalize a path by resolving . and ..

        '..' above the root is dropped; leading '..' components of a
        relative path are kept.

        Args:
            path: Path to normalize

        Returns:
            Normalized path string
        """
        parsed = PathResolver.parse(path)

        result: List[str] = []

        for component in parsed.components:
            if component == '..':
                if result and result[-1] != '..':
                    result.pop()
                elif not parsed.is_absolute:
                    result.append(component)
            else:
                result.append(component)

        return str(ParsedPath(is_absolute=parsed.is_absolute, components=result))

    @staticmethod
    def join(*paths: str) -> str:
        """
        Join path components with a single separator between them.

        Unlike ``os.path.join`` an absolute component does not discard
        what precedes it: ``join('/a', '/b') == '/a/b'``.

        Args:
            *paths: Path components to join

        Returns:
            Joined path string
        """
        parts = [p for p in paths if p]
        if not parts:
            return ''

        result = parts[0]
        for path in parts[1:]:
            result = result.rstrip(SEPARATOR) + SEPARATOR + path.lstrip(SEPARATOR)

        return result

    @staticmethod
    def dirname(path: str) -> str:
        """
        Get the directory name of a path.

        Args:
            path: Path string

        Returns:
            Directory name portion ('.' for a bare name)
        """
        stripped = path.rstrip(SEPARATOR)

        if not stripped:
            return SEPARATOR if path else '.'

        if SEPARATOR not in stripped:
            return '.'

        head = stripped.rsplit(SEPARATOR, 1)[0].rstrip(SEPARATOR)
        return head or SEPARATOR

    @staticmethod
    def basename(path: str, suffix: str = '') -> str:
        """
        Get the base name of a path.

        Args:
            path: Path string
            suffix: Extension to strip from the result ('.*' strips any)

        Returns:
            Base name portion
        """
        stripped = path.rstrip(SEPARATOR)

        if not stripped:
            return SEPARATOR if path else ''

        name = stripped.rsplit(SEPARATOR, 1)[-1]

        if suffix == '.*':
            ext = PathResolver.extname(name)
            if ext:
                name = name[:-len(ext)]
        elif suffix and name.endswith(suffix) and name != suffix:
            name = name[:-len(suffix)]

        return name

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """
        Split a path into directory and base name.

        Args:
            path: Path string

        Returns:
            Tuple of (dirname, basename)
        """
        return (PathResolver.dirname(path), PathResolver.basename(path))

    @staticmethod
    def extname(path: str) -> str:
        """
        Get the extension of the last path component.

        Dotfiles such as '.profile' have no extension.

        Args:
            path: Path string

        Returns:
            Extension including the dot, or ''
        """
        name = PathResolver.basename(path).lstrip('.')
        if '.' not in name or name.endswith('.'):
            return ''
        return '.' + name.rsplit('.', 1)[1]

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith(SEPARATOR)

    @staticmethod
    def fnmatch(pattern: str, path: str, flags: int = 0) -> bool:
        """
        Match a path against a shell glob pattern.

        Args:
            pattern: Glob pattern ('*', '?', '[...]', '**/', '{a,b}')
            path: Path to test
            flags: Combination of GlobFlag values

        Returns:
            True if the whole path matches
        """
        return any(
            regex.fullmatch(path) is not None
            for regex in _compile_pattern(pattern, int(flags))
        )

    @staticmethod
    def glob_filter(patterns: Iterable[str], paths: Iterable[str], flags: int = 0) -> List[str]:
        """
        Keep the paths matching at least one pattern, in input order.

        Args:
            patterns: Glob patterns
            paths: Candidate paths
            flags: Combination of GlobFlag values

        Returns:
            Matching paths
        """
        patterns = list(patterns)
        return [
            path for path in paths
            if any(PathResolver.fnmatch(pattern, path, flags) for pattern in patterns)
        ]


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str, flags: int) -> Tuple['re.Pattern[str]', ...]:
    alternatives = (
        _expand_braces(pattern, flags)
        if flags & GlobFlag.EXTGLOB else [pattern]
    )
    re_flags = re.DOTALL
    if flags & GlobFlag.CASEFOLD:
        re_flags |= re.IGNORECASE
    return tuple(re.compile(_translate(alt, flags), re_flags) for alt in alternatives)


def _expand_braces(pattern: str, flags: int) -> List[str]:
    """Expand the first top-level '{a,b}' group, recursively."""
    escapes = not flags & GlobFlag.NOESCAPE
    depth = 0
    start = None
    commas: List[int] = []
    i = 0

    while i < len(pattern):
        char = pattern[i]
        if char == '\\' and escapes:
            i += 2
            continue
        if char == '{':
            if depth == 0:
                start = i
                commas = []
            depth += 1
        elif char == ',' and depth == 1:
            commas.append(i)
        elif char == '}' and depth > 0:
            depth -= 1
            if depth == 0:
                prefix, suffix = pattern[:start], pattern[i + 1:]
                bounds = [start] + commas + [i]
                expanded: List[str] = []
                for left, right in zip(bounds, bounds[1:]):
                    choice = pattern[left + 1:right]
                    expanded.extend(_expand_braces(prefix + choice + suffix, flags))
                return expanded
        i += 1

    return [pattern]


def _translate(pattern: str, flags: int) -> str:
    """Translate one brace-free glob pattern into a regular expression."""
    pathname = bool(flags & GlobFlag.PATHNAME)
    dotmatch = bool(flags & GlobFlag.DOTMATCH)
    escapes = not flags & GlobFlag.NOESCAPE

    any_char = '[^/]' if pathname else '.'
    no_leading_dot = '(?!\\.)'

    out: List[str] = []
    segment_start = True
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]

        if pathname and segment_start and pattern.startswith('**/', i):
            # zero or more whole directories
            directory = '[^/]*/' if dotmatch else '(?!\\.)[^/]*/'
            out.append(f'(?:{directory})*')
            i += 3
            continue

        if char == '*':
            while i < n and pattern[i] == '*':
                i += 1
            if segment_start and not dotmatch:
                out.append(no_leading_dot)
            out.append(any_char + '*')
            segment_start = False
            continue

        if char == '?':
            if segment_start and not dotmatch:
                out.append(no_leading_dot)
            out.append(any_char)
            segment_start = False
            i += 1
            continue

        if char == '[':
            end, char_class = _translate_class(pattern, i, pathname, escapes)
            if end is not None:
                if segment_start and not dotmatch:
                    out.append(no_leading_dot)
                out.append(char_class)
                segment_start = False
                i = end
                continue

        if char == '\\' and escapes and i + 1 < n:
            i += 1
            char = pattern[i]

        out.append(re.escape(char))
        segment_start = pathname and char == SEPARATOR
        i += 1

    return ''.join(out)


def _translate_class(pattern: str, start: int, pathname: bool, escapes: bool):
    """
    Translate a '[...]' character class starting at ``start``.

    Returns (index after ']', regex) or (None, None) when the class is
    not terminated, in which case '[' is matched literally.
    """
    i = start + 1
    n = len(pattern)
    negate = False

    if i < n and pattern[i] in '!^':
        negate = True
        i += 1

    members: List[str] = []
    first = True

    while i < n:
        char = pattern[i]
        if char == ']' and not first:
            break
        if char == '\\' and escapes and i + 1 < n:
            i += 1
            char = pattern[i]
        if char == '-' and members and i + 1 < n and pattern[i + 1] != ']':
            high = pattern[i + 1]
            if high == '\\' and escapes and i + 2 < n:
                i += 1
                high = pattern[i + 1]
            members.append('-' + re.escape(high))
            i += 2
            first = False
            continue
        members.append(re.escape(char))
        first = False
        i += 1
    else:
        return None, None

    body = ''.join(members)
    if negate:
        excluded = '/' if pathname else ''
        return i + 1, f'[^{body}{excluded}]'
    if pathname:
        return i + 1, f'(?!/)[{body}]'
    return i + 1, f'[{body}]'
