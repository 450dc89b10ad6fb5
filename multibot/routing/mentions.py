"""Mention ("at") helpers.

Hosts encode mentions as inline elements such as ``<at id="123"/>`` or
``<at id="123" name="bot"></at>``.  These helpers pull the target ids out of
raw content and resolve which attached bots were addressed.
"""

from __future__ import annotations

import re
from typing import Iterable

from multibot.bus.events import BotIdentity, IncomingMessage

_AT_ELEMENT_RE = re.compile(r"""<at\b[^>]*?\sid\s*=\s*(["'])(.*?)\1[^>]*>""", re.IGNORECASE)


def extract_mention_targets(content: str) -> list[str]:
    """Return the ids of every ``<at>`` element in *content*, in order, without duplicates."""
    targets: list[str] = []
    for match in _AT_ELEMENT_RE.finditer(content or ""):
        target = match.group(2).strip()
        if target and target not in targets:
            targets.append(target)
    return targets


def mentioned_identities(
    msg: IncomingMessage, identities: Iterable[BotIdentity]
) -> list[BotIdentity]:
    """Attached bot identities addressed by *msg*.

    Only identities on the message's platform count; mentions of ordinary
    users are ignored.
    """
    targets = set(msg.mention_targets)
    if not targets:
        return []
    return [
        ident for ident in identities
        if ident.platform == msg.platform and ident.self_id in targets
    ]
