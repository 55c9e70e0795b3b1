"""
Identity Module

The user and group ids the filesystem acts on behalf of. New entries
are owned by the effective ids; permission queries use either the
effective or the real ids.

Author: YSNRFD
Version: 1.0.0
"""

import os
from dataclasses import dataclass


def _process_id(name: str) -> int:
    # os.getuid and friends do not exist on Windows
    getter = getattr(os, name, None)
    return getter() if getter is not None else 0


@dataclass(frozen=True)
class Identity:
    """Real and effective user/group ids."""
    uid: int = 0
    gid: int = 0
    euid: int = 0
    egid: int = 0

    @classmethod
    def current(cls) -> 'Identity':
        """Identity of the running process."""
        return cls(
            uid=_process_id('getuid'),
            gid=_process_id('getgid'),
            euid=_process_id('geteuid'),
            egid=_process_id('getegid'),
        )

    @classmethod
    def of(cls, uid: int, gid: int) -> 'Identity':
        """Identity whose real and effective ids are the same."""
        return cls(uid=uid, gid=gid, euid=uid, egid=gid)
