"""Provision de-duplication before load.

GhanaLII markup sometimes yields the same provision_ref twice (amendment
overlays, repeated schedule sections). One record per ref survives: the one
with strictly longer whitespace-normalised content, the earlier one on ties.
"""
from __future__ import annotations
import re
from typing import Dict, List, Tuple

from .schemas import DedupStats, Provision


def _norm(text: str | None) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _prefer(existing: Provision, incoming: Provision) -> Provision:
    winner, loser = existing, incoming
    if len(_norm(incoming.content)) > len(_norm(existing.content)):
        winner, loser = incoming, existing
    if not winner.title and loser.title:
        winner = winner.model_copy(update={'title': loser.title})
    return winner


def dedupe_provisions(provisions: List[Provision]) -> Tuple[List[Provision], DedupStats]:
    by_ref: Dict[str, Provision] = {}
    stats = DedupStats()
    for prov in provisions:
        ref = prov.provision_ref.strip()
        if ref != prov.provision_ref:
            prov = prov.model_copy(update={'provision_ref': ref})
        existing = by_ref.get(ref)
        if existing is None:
            by_ref[ref] = prov
            continue
        stats.duplicate_refs += 1
        if _norm(existing.content) != _norm(prov.content):
            stats.conflicting_duplicates += 1
        # dict keeps first-insertion order, so the slot stays where the ref first appeared
        by_ref[ref] = _prefer(existing, prov)
    return list(by_ref.values()), stats


__all__ = ['dedupe_provisions']
