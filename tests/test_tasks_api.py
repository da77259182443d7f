"""Tests for the tasks API endpoints."""

from pathlib import Path


class TestTasksAPIVaultChecks:
    def test_list_tasks_returns_503_when_vault_none(self, client, override_settings):
        override_settings(vault_path=None)
        resp = client.get("/api/v1/tasks")
        assert resp.status_code == 503
        assert "Vault path" in resp.json()["detail"]

    def test_list_tasks_returns_503_when_vault_missing(self, client, override_settings, tmp_path):
        override_settings(vault_path=tmp_path / "nonexistent")
        resp = client.get("/api/v1/tasks")
        assert resp.status_code == 503

    def test_markdown_returns_503_when_vault_none(self, client, override_settings):
        override_settings(vault_path=None)
        resp = client.get("/api/v1/tasks/markdown")
        assert resp.status_code == 503

    def test_unknown_root_returns_404(self, client, override_settings, vault):
        override_settings(vault_path=vault)
        resp = client.get("/api/v1/tasks", params={"root": "missing"})
        assert resp.status_code == 404
        assert "missing" in resp.json()["detail"]


class TestListTasks:
    def test_collection_shape(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note(
            "journal/a.md",
            "- 2025/03/03 ~ 2025/03/09\n  - [ ] report\n    - [x] outline\n- someday\n  - x\n",
        )
        write_note("journal/b.md", "- 2025/03/05\n  - [x] call\n")

        resp = client.get("/api/v1/tasks", params={"root": "journal"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["root_paths"] == ["journal"]
        assert data["task_count"] == 2
        week, day = data["temporals"]
        assert week["kind"] == "week"
        assert week["label"] == "2025/03/03 ~ 2025/03/09"
        assert week["anchor"] == "2025/03/03"
        assert week["start"] == "2025/03/03"
        assert week["end"] == "2025/03/09"
        source = week["sources"][0]
        assert source["display_name"] == "a"
        task = source["tasks"][0]
        assert task["text"] == "report"
        assert task["raw_text"] == "[ ] report"
        assert task["checkbox"] == "undone"
        assert task["all_checked"] is False
        assert task["children"][0]["checkbox"] == "done"
        assert day["kind"] == "day"
        assert day["sources"][0]["tasks"][0]["all_checked"] is True
        malformed = data["malformed"]
        assert len(malformed) == 1
        assert malformed[0]["reason"] == "invalid date format"
        assert malformed[0]["text"] == "someday"
        assert malformed[0]["message"] == "a: Malformed because: invalid date format"

    def test_default_roots_from_settings(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault, root_paths=["journal"])
        write_note("journal/a.md", "- 2025/03/05\n  - x\n")
        write_note("other/b.md", "- 2025/03/05\n  - y\n")

        data = client.get("/api/v1/tasks").json()

        assert data["root_paths"] == ["journal"]
        assert data["task_count"] == 1

    def test_repeated_root_params(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note("journal/a.md", "- 2025/03/05\n  - x\n")
        write_note("other/b.md", "- 2025/03/05\n  - y\n")

        data = client.get("/api/v1/tasks?root=journal&root=other").json()

        assert data["task_count"] == 2
        assert [s["display_name"] for s in data["temporals"][0]["sources"]] == ["a", "b"]


class TestTasksMarkdown:
    def test_renders_overview(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault, old_task_days=100000)
        write_note("a.md", "- 2025/03/05\n  - [ ] x\n")

        resp = client.get("/api/v1/tasks/markdown")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/markdown")
        assert resp.text == "## Tasks\n\n- 2025/03/05\n  - a\n    - [ ] x\n"

    def test_empty_vault(self, client, override_settings, vault: Path):
        override_settings(vault_path=vault)
        resp = client.get("/api/v1/tasks/markdown")
        assert resp.text == "No tasks found.\n"


class TestTaskTemplate:
    def test_template(self, client):
        resp = client.get("/api/v1/tasks/template", params={"start": "2025/03/09", "end": "2025/03/10"})
        assert resp.status_code == 200
        assert resp.text == "- 2025/03/09\n- 2025/03/10 ~ 2025/03/16\n- 2025/03/10\n"

    def test_bad_date_returns_400(self, client):
        resp = client.get("/api/v1/tasks/template", params={"start": "2025-03-09", "end": "2025/03/10"})
        assert resp.status_code == 400

    def test_reversed_range_returns_400(self, client):
        resp = client.get("/api/v1/tasks/template", params={"start": "2025/03/10", "end": "2025/03/09"})
        assert resp.status_code == 400

    def test_missing_params_returns_422(self, client):
        resp = client.get("/api/v1/tasks/template")
        assert resp.status_code == 422


class TestTasksForPeriod:
    def test_day(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note("a.md", "- 2025/03/05\n  - [ ] call\n  - [x] email\n")

        resp = client.get("/api/v1/tasks/day", params={"date": "2025/03/05"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["label"] == "2025/03/05"
        assert [t["text"] for t in data["tasks"]] == ["call", "email"]

    def test_day_without_tasks_returns_404(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note("a.md", "- 2025/03/05\n  - [ ] call\n")

        resp = client.get("/api/v1/tasks/day", params={"date": "2025/03/06"})

        assert resp.status_code == 404
        assert "2025/03/06" in resp.json()["detail"]

    def test_week_from_any_weekday(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note("a.md", "- 2025/03/03 ~ 2025/03/09\n  - [ ] report\n")
        write_note("b.md", "- 2025/03/03 ~ 2025/03/09\n  - [ ] review\n")

        resp = client.get("/api/v1/tasks/week", params={"date": "2025/03/06"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["label"] == "2025/03/03 ~ 2025/03/09"
        assert [t["text"] for t in data["tasks"]] == ["report", "review"]

    def test_week_without_tasks_returns_404(self, client, override_settings, vault: Path, write_note):
        override_settings(vault_path=vault)
        write_note("a.md", "- 2025/03/03\n  - [ ] monday only\n")

        resp = client.get("/api/v1/tasks/week", params={"date": "2025/03/03"})

        assert resp.status_code == 404

    def test_bad_date_returns_400(self, client, override_settings, vault: Path):
        override_settings(vault_path=vault)
        assert client.get("/api/v1/tasks/day", params={"date": "2025-03-05"}).status_code == 400
        assert client.get("/api/v1/tasks/week", params={"date": "soon"}).status_code == 400

    def test_day_returns_503_when_vault_none(self, client, override_settings):
        override_settings(vault_path=None)
        resp = client.get("/api/v1/tasks/day", params={"date": "2025/03/05"})
        assert resp.status_code == 503
