"""
Unit tests for LocalCameraRepository over a JSON file store.
"""
import asyncio
import json
from unittest.mock import patch

import pytest
from camera_map.domain.exceptions import NotFoundError, StorageError, ValidationError
from camera_map.domain.models import CameraFilters, CameraStatus, CameraType
from camera_map.infrastructure.db.local_camera_repository import LocalCameraRepository
from camera_map.infrastructure.storage.json_file_store import CorruptRecordError

PLAZA_MAYOR = {
    "name": "Plaza Mayor",
    "type": "ptz",
    "status": "active",
    "lat": -8.1116,
    "lng": -79.0288,
    "location": "Centro",
}


@pytest.fixture
def repo(local_store):
    return LocalCameraRepository(local_store)


class TestCreate:
    """Tests for LocalCameraRepository.create"""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_equal_timestamps(self, repo):
        camera = await repo.create(PLAZA_MAYOR)
        assert camera.id
        assert camera.created_at == camera.updated_at
        assert camera.type is CameraType.PTZ

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, repo):
        first = await repo.create(PLAZA_MAYOR)
        second = await repo.create({**PLAZA_MAYOR, "name": "Óvalo Grau"})
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_persists_client_shape(self, repo, local_store):
        camera = await repo.create({**PLAZA_MAYOR, "stationId": "nsp"})
        records = local_store.read("cameras")
        assert len(records) == 1
        assert records[0]["id"] == camera.id
        assert records[0]["stationId"] == "nsp"
        assert "createdAt" in records[0]

    @pytest.mark.asyncio
    async def test_invalid_create_writes_nothing(self, repo, local_store):
        with pytest.raises(ValidationError):
            await repo.create({**PLAZA_MAYOR, "lat": 123})
        assert local_store.read("cameras") is None

    @pytest.mark.asyncio
    async def test_round_trip_through_new_instance(self, repo, local_store):
        camera = await repo.create({**PLAZA_MAYOR, "notes": "Frente a la catedral"})
        reloaded = await LocalCameraRepository(local_store).get_by_id(camera.id)
        assert reloaded == camera


class TestQueries:
    """Tests for get_all / get_by_id"""

    @pytest.mark.asyncio
    async def test_empty_storage(self, repo):
        assert await repo.get_all() == []
        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_filters_are_anded(self, repo):
        await repo.create(PLAZA_MAYOR)
        await repo.create({**PLAZA_MAYOR, "name": "Mall Aventura", "status": "offline"})
        await repo.create({**PLAZA_MAYOR, "name": "Huanchaco", "location": "Huanchaco"})

        active_centro = await repo.get_all(CameraFilters(status=CameraStatus.ACTIVE, location="Centro"))
        assert [c.name for c in active_centro] == ["Plaza Mayor"]

        searched = await repo.get_all(CameraFilters(search_text="mall"))
        assert [c.name for c in searched] == ["Mall Aventura"]

        assert len(await repo.get_all(CameraFilters())) == 3

    @pytest.mark.asyncio
    async def test_no_match_is_empty_list(self, repo):
        await repo.create(PLAZA_MAYOR)
        assert await repo.get_all(CameraFilters(type=CameraType.BULLET)) == []


class TestUpdate:
    """Tests for sparse update"""

    @pytest.mark.asyncio
    async def test_only_patched_fields_change(self, repo):
        camera = await repo.create(PLAZA_MAYOR)
        updated = await repo.update(camera.id, {"status": "maintenance"})
        assert updated.status is CameraStatus.MAINTENANCE
        assert updated.name == camera.name
        assert updated.location == camera.location
        assert updated.created_at == camera.created_at
        assert updated.updated_at > camera.updated_at

    @pytest.mark.asyncio
    async def test_consecutive_updates_strictly_increase(self, repo):
        camera = await repo.create(PLAZA_MAYOR)
        first = await repo.update(camera.id, {"name": "A"})
        second = await repo.update(camera.id, {"name": "B"})
        assert camera.updated_at < first.updated_at < second.updated_at

    @pytest.mark.asyncio
    async def test_update_is_persisted(self, repo):
        camera = await repo.create(PLAZA_MAYOR)
        await repo.update(camera.id, {"notes": "Reubicada"})
        reloaded = await repo.get_by_id(camera.id)
        assert reloaded.notes == "Reubicada"

    @pytest.mark.asyncio
    async def test_unknown_id(self, repo):
        with pytest.raises(NotFoundError) as exc_info:
            await repo.update("missing", {"name": "X"})
        assert exc_info.value.camera_id == "missing"


class TestDelete:
    """Tests for delete (not idempotent)"""

    @pytest.mark.asyncio
    async def test_delete_then_not_found(self, repo):
        camera = await repo.create(PLAZA_MAYOR)
        await repo.delete(camera.id)
        assert await repo.get_by_id(camera.id) is None
        with pytest.raises(NotFoundError):
            await repo.delete(camera.id)

    @pytest.mark.asyncio
    async def test_delete_unknown(self, repo):
        with pytest.raises(NotFoundError):
            await repo.delete("missing")


class TestCorruptStorage:
    """Corrupt local data reads as an empty collection"""

    @pytest.mark.asyncio
    async def test_invalid_json(self, repo, local_store):
        local_store.base_dir.mkdir(parents=True, exist_ok=True)
        (local_store.base_dir / "cameras.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptRecordError):
            local_store.read("cameras")
        assert await repo.get_all() == []

    @pytest.mark.asyncio
    async def test_not_a_list(self, repo, local_store):
        local_store.write("cameras", {"id": "x"})
        assert await repo.get_all() == []

    @pytest.mark.asyncio
    async def test_invalid_record(self, repo, local_store):
        local_store.write("cameras", [{"id": "x", "name": "No coordinates"}])
        assert await repo.get_all() == []

    @pytest.mark.asyncio
    async def test_invalid_record_does_not_hide_valid_ones(self, repo, local_store):
        plaza = await repo.create(PLAZA_MAYOR)
        other = await repo.create({**PLAZA_MAYOR, "name": "Other"})
        broken = {"id": "x", "name": "broken"}
        local_store.write("cameras", local_store.read("cameras") + [broken])

        assert [c.id for c in await repo.get_all()] == [plaza.id, other.id]

        created = await repo.create({**PLAZA_MAYOR, "name": "New"})
        records = local_store.read("cameras")
        assert [r["name"] for r in records] == ["Plaza Mayor", "Other", "broken", "New"]
        assert records[2] == broken
        assert [c.id for c in await repo.get_all()] == [plaza.id, other.id, created.id]

    @pytest.mark.asyncio
    async def test_update_and_delete_keep_invalid_records(self, repo, local_store):
        camera = await repo.create(PLAZA_MAYOR)
        local_store.write("cameras", [{"id": "x"}] + local_store.read("cameras"))

        await repo.update(camera.id, {"name": "Renamed"})
        assert [r["name"] for r in local_store.read("cameras")[1:]] == ["Renamed"]

        await repo.delete(camera.id)
        assert local_store.read("cameras") == [{"id": "x"}]
        with pytest.raises(NotFoundError):
            await repo.delete("x")

    @pytest.mark.asyncio
    async def test_create_over_corrupt_storage_starts_fresh(self, repo, local_store):
        local_store.base_dir.mkdir(parents=True, exist_ok=True)
        (local_store.base_dir / "cameras.json").write_text("]]", encoding="utf-8")
        camera = await repo.create(PLAZA_MAYOR)
        assert [c.id for c in await repo.get_all()] == [camera.id]
        assert json.loads((local_store.base_dir / "cameras.json").read_text(encoding="utf-8"))[0]["id"] == camera.id


class TestJsonFileStore:
    """Tests for the underlying store"""

    def test_invalid_key(self, local_store):
        with pytest.raises(StorageError):
            local_store.read("../escape")

    def test_unserializable_value(self, local_store):
        with pytest.raises(StorageError):
            local_store.write("cameras", {"bad": object()})
        assert local_store.read("cameras", default=[]) == []

    def test_write_syncs_before_replace(self, local_store):
        with patch("camera_map.infrastructure.storage.json_file_store.os.fsync") as fsync:
            local_store.write("cameras", [])
        fsync.assert_called_once()
        assert local_store.read("cameras") == []


class TestConcurrentMutations:
    """Mutations run off the event loop but never interleave"""

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_all_kept(self, repo, local_store):
        names = [f"Camera {i}" for i in range(8)]
        created = await asyncio.gather(*(repo.create({**PLAZA_MAYOR, "name": name}) for name in names))

        stored = local_store.read("cameras")
        assert len(stored) == len(names)
        assert {r["id"] for r in stored} == {c.id for c in created}

    @pytest.mark.asyncio
    async def test_file_io_runs_in_worker_thread(self, repo):
        with patch(
            "camera_map.infrastructure.db.local_camera_repository.asyncio.to_thread",
            wraps=asyncio.to_thread,
        ) as to_thread:
            await repo.create(PLAZA_MAYOR)
            await repo.get_all()
        assert to_thread.call_count == 3
