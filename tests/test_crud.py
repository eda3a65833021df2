"""
CRUD-layer tests run directly against the database session.
"""

import pytest

from app.core.database import run_query
from app.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud


class TestRunQuery:

    def test_positional_params_bind_in_order(self, db_session, seed):
        rows = run_query(
            db_session,
            "SELECT handle FROM companies WHERE num_employees >= $1 AND num_employees <= $2 ORDER BY handle",
            [2, 3],
        )

        assert rows == [{"handle": "c2"}, {"handle": "c3"}]

    def test_statement_without_rows(self, db_session, seed):
        assert run_query(db_session, "UPDATE companies SET description = $1", ["x"]) == []


class TestCompanyCrud:

    def test_find_filtered_empty_is_list(self, db_session, seed):
        assert company_crud.find_filtered(db_session, {"name": "zzz"}) == []

    def test_find_filtered_without_filters(self, db_session, seed):
        rows = company_crud.find_filtered(db_session, {})

        assert [c["handle"] for c in rows] == ["c1", "c2", "c3"]

    def test_update_uses_next_placeholder_for_handle(self, db_session, seed):
        company = company_crud.update(db_session, "c3", {"numEmployees": 30, "logoUrl": "http://x.img"})

        assert company["numEmployees"] == 30
        assert company["logoUrl"] == "http://x.img"
        assert company_crud.get(db_session, "c2")["numEmployees"] == 2

    def test_update_empty_touches_nothing(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})


class TestJobCrud:

    def test_find_filtered_empty_is_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.find_filtered(db_session, {"minSalary": 1000})

    def test_unfiltered_path_on_empty_table(self, db_session):
        with pytest.raises(NotFoundError):
            job_crud.find_filtered(db_session, {"hasEquity": False})

    def test_title_with_quote_is_bound(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.find_filtered(db_session, {"title": "' OR '1'='1"})

    def test_update_only_changes_target(self, db_session, seed):
        job_crud.update(db_session, seed["jobs"]["j2"], {"salary": 99})

        assert job_crud.get(db_session, seed["jobs"]["j2"])["salary"] == 99
        assert job_crud.get(db_session, seed["jobs"]["j3"])["salary"] == 3


class TestUserCrud:

    def test_authenticate(self, db_session, seed):
        user = user_crud.authenticate(db_session, "u2", "password2")

        assert user["username"] == "u2"
        assert "password" not in user

    def test_authenticate_wrong_password(self, db_session, seed):
        with pytest.raises(UnauthorizedError):
            user_crud.authenticate(db_session, "u2", "password1")

    def test_get_all_groups_applications(self, db_session, seed):
        users = user_crud.get_all(db_session)

        assert [u["username"] for u in users] == ["u1", "u2", "u3"]
        assert users[1]["jobs"] == sorted(seed["jobs"][t] for t in ("j1", "j2"))
        assert users[0]["jobs"] == []

    def test_apply_accepts_numeric_string(self, db_session, seed):
        job_id = seed["jobs"]["j3"]

        assert user_crud.apply(db_session, "u3", str(job_id)) == job_id

    def test_apply_unknown_user(self, db_session, seed):
        with pytest.raises(BadRequestError):
            user_crud.apply(db_session, "ghost", seed["jobs"]["j1"])

    def test_update_hashes_password(self, db_session, seed):
        user_crud.update(db_session, "u3", {"password": "changed"})

        stored = run_query(db_session, "SELECT password FROM users WHERE username = $1", ["u3"])[0]["password"]
        assert stored != "changed"
        assert user_crud.authenticate(db_session, "u3", "changed")["username"] == "u3"
