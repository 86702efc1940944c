"""Parse ``git stash list`` output into stash records."""

from __future__ import annotations

import re

from .git import stash_ref
from .models import StashRecord, WipMode

STASH_PATTERN = re.compile(r"stash@\{(\d+)\}:\s*(.*?)(?:\s*on\s+([\w\d/-]+))?(?::\s*(.*))?$")
WIP_PREFIX = "wip on"


def parse_stash_line(line: str, wip_mode: WipMode = WipMode.DESCRIPTION) -> StashRecord | None:
    """Turn one ``stash@{N}: ...`` line into a record, or ``None`` if it is not one.

    The trailing ``: <message>`` segment wins over the raw description when
    both are present, so ``stash@{0}: WIP on main: quick fix`` yields the
    message ``quick fix`` on branch ``main``.
    """

    match = STASH_PATTERN.search(line)
    if not match:
        return None
    index = int(match.group(1))
    branch = match.group(3) or ""
    message = match.group(4) if match.group(4) is not None else match.group(2)
    if wip_mode is WipMode.MESSAGE:
        is_wip = _is_wip(message)
    else:
        description = line[match.end(1) + 2 :]
        is_wip = _is_wip(description.strip())
    return StashRecord(
        index=index,
        name=stash_ref(index),
        message=message,
        branch_name=branch,
        is_work_in_progress=is_wip,
    )


def parse_stash_list(output: str, wip_mode: WipMode = WipMode.DESCRIPTION) -> list[StashRecord]:
    records: list[StashRecord] = []
    for line in output.splitlines():
        record = parse_stash_line(line, wip_mode)
        if record is not None:
            records.append(record)
    return records


def _is_wip(text: str) -> bool:
    return text.lower().startswith(WIP_PREFIX)
