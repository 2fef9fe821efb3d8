"""
Integration tests for a full map session over local JSON storage.
Uses the real container, store, reconciler and placement workflow; only the
map surface and the geocoder are in-memory fakes.
"""
import json
from unittest.mock import AsyncMock

import pytest

pytestmark = pytest.mark.integration

from camera_map.domain.interfaces.geocoder import GeocodeCandidate, Geocoder
from camera_map.main import create_application, create_map_session, shutdown_application

PLAZA_MAYOR = (-8.1116, -79.0288)


@pytest.fixture
def container(mock_env, tmp_path):
    return create_application(env_file=tmp_path / "missing.env")


def _stored_records(mock_env):
    path = f"{mock_env['CAMERA_STORAGE_DIR']}/cameras.json"
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class TestMapFlow:
    """End-to-end placement, focus and delete"""

    @pytest.mark.asyncio
    async def test_plaza_mayor_scenario(self, container, fake_surface, mock_env):
        session = create_map_session(fake_surface, container=container)
        await session.start()
        assert fake_surface.persistent_markers() == {}
        assert fake_surface.min_zoom == 12

        session.placement.begin_placement()
        fake_surface.emit("click", *PLAZA_MAYOR)
        assert len(fake_surface.temporary_markers()) == 1

        camera = await session.placement.submit(
            {"name": "Plaza Mayor", "type": "ptz", "status": "active", "location": "Centro"}
        )

        markers = fake_surface.persistent_markers()
        assert len(markers) == 1
        marker = next(iter(markers.values()))
        assert (marker["lat"], marker["lng"]) == PLAZA_MAYOR
        assert marker["style"].fill == "#10b981"
        assert marker["popup"].title == "Plaza Mayor"
        assert fake_surface.temporary_markers() == {}
        assert session.store.locations == ["Centro"]

        records = _stored_records(mock_env)
        assert records[0]["id"] == camera.id
        assert records[0]["createdAt"] == records[0]["updatedAt"]

        assert await session.focus(camera.id) is True
        assert fake_surface.calls[-1] == ("open_popup", session.reconciler.markers[camera.id])

        await session.close()
        await shutdown_application()

    @pytest.mark.asyncio
    async def test_collection_survives_restart(self, container, fake_surface, mock_env, tmp_path):
        session = create_map_session(fake_surface, container=container)
        await session.start()
        session.placement.begin_placement()
        session.placement.handle_map_click(*PLAZA_MAYOR)
        camera = await session.placement.submit({"name": "Plaza Mayor", "type": "dome", "status": "offline"})
        await session.close()

        restarted = create_application(env_file=tmp_path / "missing.env")
        second_surface = type(fake_surface)()
        second_session = create_map_session(second_surface, container=restarted)
        await second_session.start()

        assert [c.id for c in second_session.store.cameras] == [camera.id]
        assert len(second_surface.persistent_markers()) == 1
        await second_session.close()

    @pytest.mark.asyncio
    async def test_delete_via_marker_secondary_action(self, container, fake_surface, mock_env):
        confirm = AsyncMock(return_value=True)
        session = create_map_session(fake_surface, container=container, confirm_delete=confirm)
        await session.start()
        session.placement.begin_placement()
        session.placement.handle_map_click(*PLAZA_MAYOR)
        camera = await session.placement.submit({"name": "Plaza Mayor", "type": "ptz", "status": "active"})

        handle = session.reconciler.markers[camera.id]
        assert await fake_surface.trigger(handle, "contextmenu") is True

        confirm.assert_awaited_once()
        assert fake_surface.persistent_markers() == {}
        assert session.store.cameras == ()
        assert _stored_records(mock_env) == []
        await session.close()

    @pytest.mark.asyncio
    async def test_out_of_bounds_search_result(self, container, fake_surface):
        geocoder = AsyncMock(spec=Geocoder)
        geocoder.search.return_value = [
            GeocodeCandidate(id="9", label="Plaza San Martín, Lima", lat=-12.0517, lng=-77.0345)
        ]
        container.register_singleton(Geocoder, geocoder)

        session = create_map_session(fake_surface, container=container)
        await session.start()

        session.search.set_query("Plaza San Martín")
        await session.search.wait_idle()
        assert len(session.search.results) == 1

        assert await session.select_search_result(session.search.results[0]) is False
        assert session.notice.visible
        assert fake_surface.drawn == {}
        assert session.store.all_cameras == ()
        await session.close()

    @pytest.mark.asyncio
    async def test_restarting_session_does_not_duplicate_listeners(self, container, fake_surface):
        session = create_map_session(fake_surface, container=container)
        await session.start()
        await session.start()

        assert len(fake_surface.map_listeners["click"]) == 1
        assert len(fake_surface.map_listeners["drag"]) == 1
        assert len(fake_surface.map_listeners["zoomstart"]) == 1

        session.placement.begin_placement()
        fake_surface.emit("click", *PLAZA_MAYOR)
        assert len(fake_surface.temporary_markers()) == 1
        assert session.placement.pending_position is not None
        await session.close()
