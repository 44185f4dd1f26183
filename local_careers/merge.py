# local_careers/merge.py
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from local_careers.models import Snapshot, Source, StoredJob


def collapse_batch(batch: Sequence[StoredJob]) -> List[StoredJob]:
    """
    Collapse repeated lookup keys inside one batch.
    The last occurrence wins; it takes the slot of the first.
    """
    by_key: Dict[str, StoredJob] = {}
    for job in batch:
        by_key[job.lookup_key] = job
    return list(by_key.values())


def merge_sources(existing: Sequence[Source], updated: Source) -> List[Source]:
    others = [s for s in existing if s.id != updated.id]
    return others + [updated]


def merge_source_batch(
    snapshot: Snapshot, batch: Sequence[StoredJob], source: Source
) -> Tuple[Snapshot, List[StoredJob]]:
    """
    Reconcile one source's fresh batch against the stored snapshot:
      - jobs from other sources are kept as-is
      - every stored job of this source is replaced or dropped
      - the source record is upserted by id
    Returns the new snapshot and the batch that was written.
    """
    incoming = collapse_batch(batch)

    # Same-source jobs either reappear in the batch (replaced) or are no
    # longer advertised (dropped), so none of them survive.
    remaining = [j for j in snapshot.jobs if j.source.id != source.id]

    merged = Snapshot(
        jobs=remaining + incoming,
        sources=merge_sources(snapshot.sources, source),
    )
    return merged, incoming


def append_job(snapshot: Snapshot, job: StoredJob) -> Snapshot:
    return Snapshot(jobs=list(snapshot.jobs) + [job], sources=list(snapshot.sources))


def remove_job(snapshot: Snapshot, job_id: str) -> Tuple[Snapshot, bool]:
    kept = [j for j in snapshot.jobs if j.id != job_id]
    removed = len(kept) != len(snapshot.jobs)
    return Snapshot(jobs=kept, sources=list(snapshot.sources)), removed
