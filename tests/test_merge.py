from local_careers.merge import append_job, collapse_batch, merge_source_batch, remove_job
from local_careers.models import Snapshot, Source
from local_careers.normalize import normalize_job

S1 = Source(id="s1", name="One", type="remote-feed")
S2 = Source(id="s2", name="Two", type="remote-feed")


def _job(title, source, **extra):
    candidate = {"title": title, "company": "Acme", "address": "1 Main St", "url": f"https://x/{title}",
                 "latitude": 35.0, "longitude": -79.0}
    candidate.update(extra)
    return normalize_job(candidate, source)


def _titles(snapshot, source_id):
    return [j.title for j in snapshot.jobs if j.source.id == source_id]


def test_reimport_replaces_and_drops_stale_jobs():
    snap, _ = merge_source_batch(Snapshot(), [_job("A", S1), _job("B", S1)], S1)
    snap, _ = merge_source_batch(snap, [_job("B", S1), _job("C", S1)], S1)

    assert sorted(_titles(snap, "s1")) == ["B", "C"]
    assert len(snap.jobs) == 2


def test_other_sources_are_untouched():
    snap, _ = merge_source_batch(Snapshot(), [_job("A", S1)], S1)
    before = [j.model_dump() for j in snap.jobs]

    snap, _ = merge_source_batch(snap, [_job("A", S2), _job("Z", S2)], S2)

    assert [j.model_dump() for j in snap.jobs if j.source.id == "s1"] == before
    assert sorted(_titles(snap, "s2")) == ["A", "Z"]


def test_source_record_is_upserted_by_id():
    snap, _ = merge_source_batch(Snapshot(), [_job("A", S1)], S1)
    snap, _ = merge_source_batch(snap, [_job("B", S2)], S2)
    renamed = Source(id="s1", name="One (renamed)", type="remote-feed")

    snap, _ = merge_source_batch(snap, [_job("A", renamed)], renamed)

    assert [s.id for s in snap.sources] == ["s2", "s1"]
    assert snap.sources[1].name == "One (renamed)"


def test_last_duplicate_in_batch_wins():
    first = _job("A", S1, description="old")
    last = _job("a", S1, description="new")

    collapsed = collapse_batch([first, _job("B", S1), last])

    assert [j.description for j in collapsed if j.lookup_key == first.lookup_key] == ["new"]
    assert len(collapsed) == 2


def test_append_job_never_replaces():
    snap = append_job(Snapshot(), _job("A", Source(id="m1", name="Manual", type="manual")))
    snap = append_job(snap, _job("A", Source(id="m2", name="Manual", type="manual")))

    assert len(snap.jobs) == 2
    assert snap.sources == []


def test_remove_job():
    job = _job("A", S1)
    snap = Snapshot(jobs=[job, _job("B", S1)])

    same, removed = remove_job(snap, "nope")
    assert removed is False
    assert len(same.jobs) == 2

    smaller, removed = remove_job(snap, job.id)
    assert removed is True
    assert [j.title for j in smaller.jobs] == ["B"]
