"""Depfile generation - make-compatible dependency lists.

Produces a single rule line listing every file that went into a
preprocessed output, so build tools can rerun the preprocessor when any
of them changes:

    out.i: /src/main.c /src/include/util.c
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def create_depfile(
    target: str,
    identities: Iterable[str],
    strip_prefix: str | None = None,
) -> str:
    """Create the source of a dependency file.

    Args:
        target: The rule target, usually the output file.
        identities: Files the target depends on. A DependencyGraph can be
            passed directly; its identities are listed in graph order.
        strip_prefix: Prefix removed from each identity that starts with it.

    Returns:
        ``"<target>: <dep1> <dep2> ..."`` with all backslashes turned into
        forward slashes, which make expects even on Windows.
    """
    deps = []
    for identity in identities:
        if strip_prefix:
            if identity.startswith(strip_prefix):
                identity = identity[len(strip_prefix) :]
            else:
                logger.warning("Failed to strip prefix %r from %s", strip_prefix, identity)
        deps.append(identity)

    return f"{target}: {' '.join(deps)}".replace("\\", "/")
