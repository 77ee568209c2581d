"""Ghost entry synthesis — one level of manifest-only children.

Given a directory position (``prefix``) and the names that really exist in
that directory, every manifest key below ``prefix`` contributes exactly one
candidate: its segment immediately under ``prefix``. Candidates that already
exist on disk are dropped. The survivors are ghosts.

A ghost is terminal. However deep the manifest goes behind it, nothing below
a ghost is ever surfaced. Only a real directory lets deeper manifest
structure through, and only when that directory is itself listed (a fresh
call with the extended prefix and its own real names).

Example, with only ``areas/clients/admin-web`` checked out::

    keys:   //areas/clients/admin-web, //areas/clients/billing-x,
            //areas/platform/billing
    prefix: areas       real: {clients}          -> {platform}
    prefix: areas/clients  real: {admin-web}     -> {billing-x}
"""

from __future__ import annotations

from collections.abc import Iterable, Set

from wls.domain.manifest import Manifest
from wls.domain.paths import CanonicalPath, ManifestKey
from wls.domain.types import Entry


def ghost_candidates(keys: Iterable[ManifestKey], prefix: CanonicalPath) -> set[str]:
    """Collect the immediate child names under *prefix* across *keys*."""
    depth = len(prefix.segments)
    names: set[str] = set()
    for key in keys:
        segments = key.segments
        if len(segments) <= depth:
            continue
        if segments[:depth] != prefix.segments:
            continue
        names.add(segments[depth])
    return names


def synthesize_ghosts(
    manifest: Manifest,
    prefix: CanonicalPath,
    real_names: Set[str],
) -> frozenset[Entry]:
    """Return ghost entries for *prefix* not already bridged by *real_names*."""
    return frozenset(
        Entry.ghost(name) for name in ghost_candidates(manifest, prefix) if name not in real_names
    )
