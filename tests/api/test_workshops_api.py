"""Workshop endpoints: creation by experts, discovery and registration."""

from httpx import AsyncClient

from cowconnect.domain.enums import Role
from cowconnect.infrastructure.firebase.mappers import workshop_to_document
from tests.builders import make_workshop, seed_profile, seed_workshop
from tests.conftest import auth

THUMBNAIL = {"thumbnail": ("camp.png", b"\x89PNG\r\n\x1a\nimage", "image/png")}


def workshop_form(**overrides) -> dict:
    form = {
        "title": "Indigenous breed fodder planning",
        "description": "Seasonal fodder.\nBring your herd records.",
        "date_from": "2030-05-10",
        "date_to": "2030-05-10",
        "time_from": "10:00",
        "time_to": "13:00",
        "mode": "offline",
        "location": "Krishi Vigyan Kendra, Anand",
        "tags": ["Feeding", "nutrition"],
    }
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}


class TestCreate:
    async def test_expert_creates_workshop(
        self, client: AsyncClient, fake_db, storage
    ) -> None:
        seed_profile(fake_db, "doctor1", Role.DOCTOR, name="Dr. Mehta")

        response = await client.post(
            "/api/v1/workshops", data=workshop_form(), files=THUMBNAIL, headers=auth("doctor1")
        )

        assert response.status_code == 201
        body = response.json()
        assert body["owner_role"] == "doctor"
        assert body["tags"] == ["feeding", "nutrition"]
        assert body["registration_count"] == 0
        assert body["date_from"].startswith("2030-05-10T00:00:00")
        assert body["thumbnail"] == f"https://media.test/workshops/{body['id']}/image/camp.png"
        assert body["owner_profile"]["name"] == "Dr. Mehta"
        assert fake_db.doc("experts", "doctor1")["workshops"] == [body["id"]]
        stored = fake_db.doc("workshops", body["id"])
        assert stored["description"] == "Seasonal fodder.\\nBring your herd records."
        assert len(storage.uploads) == 1

    async def test_farmer_cannot_create(self, client: AsyncClient, fake_db, storage) -> None:
        seed_profile(fake_db, "farmer1", Role.FARMER)

        response = await client.post(
            "/api/v1/workshops", data=workshop_form(), files=THUMBNAIL, headers=auth("farmer1")
        )

        assert response.status_code == 403
        assert storage.uploads == []
        assert fake_db.data.get("workshops", {}) == {}

    async def test_thumbnail_must_be_an_image(self, client: AsyncClient, fake_db) -> None:
        seed_profile(fake_db, "doctor1", Role.DOCTOR)

        response = await client.post(
            "/api/v1/workshops",
            data=workshop_form(),
            files={"thumbnail": ("agenda.pdf", b"%PDF-1.7", "application/pdf")},
            headers=auth("doctor1"),
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "thumbnail"

    async def test_missing_thumbnail_fails_validation(self, client: AsyncClient, fake_db) -> None:
        seed_profile(fake_db, "doctor1", Role.DOCTOR)
        response = await client.post(
            "/api/v1/workshops", data=workshop_form(), headers=auth("doctor1")
        )
        assert response.status_code == 422

    async def test_online_workshop_needs_link_not_location(
        self, client: AsyncClient, fake_db, storage
    ) -> None:
        seed_profile(fake_db, "ngo1", Role.NGO)

        response = await client.post(
            "/api/v1/workshops",
            data=workshop_form(mode="online"),
            files=THUMBNAIL,
            headers=auth("ngo1"),
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "link"
        assert storage.uploads == []

    async def test_end_before_start_is_invalid(self, client: AsyncClient, fake_db) -> None:
        seed_profile(fake_db, "doctor1", Role.DOCTOR)
        response = await client.post(
            "/api/v1/workshops",
            data=workshop_form(time_from="14:00", time_to="09:00"),
            files=THUMBNAIL,
            headers=auth("doctor1"),
        )
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "time_to"


class TestDiscovery:
    async def test_upcoming_hides_past_workshops(self, client: AsyncClient, fake_db) -> None:
        seed_workshop(fake_db, make_workshop(workshop_id="past", days_ahead=-2))
        seed_workshop(fake_db, make_workshop(workshop_id="soon", days_ahead=1))

        response = await client.get("/api/v1/workshops/upcoming")

        assert [w["id"] for w in response.json()] == ["soon"]

    async def test_filter_by_tag(self, client: AsyncClient, fake_db) -> None:
        seed_workshop(fake_db, make_workshop(workshop_id="w1", tags=("vaccination",)))
        seed_workshop(fake_db, make_workshop(workshop_id="w2", tags=("breeding",)))

        response = await client.get("/api/v1/workshops/filter", params={"tags": ["breeding"]})

        assert [w["id"] for w in response.json()] == ["w2"]

    async def test_mine_lists_own_workshops(self, client: AsyncClient, fake_db) -> None:
        seed_workshop(fake_db, make_workshop(workshop_id="w1"))
        seed_workshop(fake_db, make_workshop(workshop_id="w2", owner_id="ngo1", owner_role=Role.NGO))

        response = await client.get("/api/v1/workshops/mine", headers=auth("doctor1"))

        assert [w["id"] for w in response.json()] == ["w1"]


class TestRegistration:
    async def test_register_then_duplicate_is_conflict(
        self, client: AsyncClient, fake_db
    ) -> None:
        seed_profile(fake_db, "farmer1", Role.FARMER, name="Ramesh Bhai", contact_no="9000000001")
        seed_workshop(fake_db, make_workshop())

        first = await client.post("/api/v1/workshops/ws1/registrations", headers=auth("farmer1"))
        second = await client.post("/api/v1/workshops/ws1/registrations", headers=auth("farmer1"))

        assert first.status_code == 201
        assert first.json()["registration"] == {
            "user_id": "farmer1",
            "name": "Ramesh Bhai",
            "contact_no": "9000000001",
            "role": "farmer",
        }
        assert second.status_code == 409
        assert second.json()["error"] == "ALREADY_REGISTERED"
        assert len(fake_db.doc("workshops", "ws1")["registrations"]) == 1
        assert fake_db.doc("farmers", "farmer1")["registrations"] == ["ws1"]

    async def test_detail_shows_caller_registration(self, client: AsyncClient, fake_db) -> None:
        seed_profile(fake_db, "farmer1", Role.FARMER)
        seed_workshop(fake_db, make_workshop())
        await client.post("/api/v1/workshops/ws1/registrations", headers=auth("farmer1"))

        mine = await client.get("/api/v1/workshops/ws1", headers=auth("farmer1"))
        anonymous = await client.get("/api/v1/workshops/ws1")

        assert mine.json()["current_user_registered"] is True
        assert mine.json()["registration_count"] == 1
        assert anonymous.json()["current_user_registered"] is False

    async def test_register_without_profile_is_not_found(
        self, client: AsyncClient, fake_db
    ) -> None:
        seed_workshop(fake_db, make_workshop())
        response = await client.post("/api/v1/workshops/ws1/registrations", headers=auth("ghost"))
        assert response.status_code == 404
        assert response.json()["details"]["resource_type"] == "profile"

    async def test_registrants_visible_to_owner_only(self, client: AsyncClient, fake_db) -> None:
        seed_profile(fake_db, "farmer1", Role.FARMER)
        seed_workshop(fake_db, make_workshop())
        await client.post("/api/v1/workshops/ws1/registrations", headers=auth("farmer1"))

        owner = await client.get("/api/v1/workshops/ws1/registrations", headers=auth("doctor1"))
        other = await client.get("/api/v1/workshops/ws1/registrations", headers=auth("farmer1"))

        assert [r["user_id"] for r in owner.json()] == ["farmer1"]
        assert other.status_code == 403

    async def test_workshop_with_repeated_registration_stays_readable(
        self, client: AsyncClient, fake_db
    ) -> None:
        repeated = {"id": "farmer1", "contactNo": "9000000001", "role": "farmer"}
        fake_db.seed(
            "workshops",
            "ws1",
            {
                **workshop_to_document(make_workshop(days_ahead=1)),
                "registrations": [
                    {**repeated, "name": "Ramesh"},
                    {**repeated, "name": "Ramesh Bhai"},
                ],
            },
        )
        seed_profile(fake_db, "farmer2", Role.FARMER)

        detail = await client.get("/api/v1/workshops/ws1", headers=auth("farmer1"))
        upcoming = await client.get("/api/v1/workshops/upcoming")
        joined = await client.post("/api/v1/workshops/ws1/registrations", headers=auth("farmer2"))

        assert detail.status_code == 200
        assert detail.json()["registration_count"] == 1
        assert detail.json()["current_user_registered"] is True
        assert [w["id"] for w in upcoming.json()] == ["ws1"]
        assert joined.status_code == 201
