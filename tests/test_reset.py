"""End-to-end tests for the reset sequence with a fake mysql client."""

from pathlib import Path
import subprocess
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mysql_reset import prompts  # noqa: E402
from mysql_reset.config import ResetSettings  # noqa: E402
from mysql_reset.errors import (  # noqa: E402
    BatchFailedError,
    ClientMissingError,
    ConnectionFailedError,
    FixturesMissingError,
    InvalidSchemaError,
    UserAbortedError,
)
from mysql_reset.reset import reset_database, should_delete  # noqa: E402


class FakeMysql:
    """Stand-in for ``subprocess.run`` that records every client call."""

    def __init__(self, schemas=("information_schema", "app", "shop"), fail=()):
        self.schemas = list(schemas)
        self.fail = set(fail)
        self.calls = []

    def __call__(self, command, **kwargs):
        sql_text = kwargs.get("input")
        self.calls.append((list(command), sql_text))
        if "--execute" in command:
            statement = command[command.index("--execute") + 1]
            if statement == "SHOW DATABASES":
                if "connect" in self.fail:
                    return subprocess.CompletedProcess(command, 1, "", "ERROR 1045 (28000): Access denied")
                return subprocess.CompletedProcess(command, 0, "\n".join(self.schemas) + "\n", "")
            if statement.startswith("DROP DATABASE"):
                code = 1 if "drop" in self.fail else 0
                return subprocess.CompletedProcess(command, code, "", "drop denied" if code else "")
        if sql_text is not None and "create" in self.fail and b"CREATE" in sql_text:
            return subprocess.CompletedProcess(command, 1, "", "ERROR 1064 (42000): syntax error")
        return subprocess.CompletedProcess(command, 0, "", "")

    @property
    def statements(self):
        return [command[-1] for command, _ in self.calls if "--execute" in command]

    @property
    def scripts(self):
        return [sql_text for _, sql_text in self.calls if sql_text is not None]

    @property
    def drops(self):
        return [statement for statement in self.statements if statement.startswith("DROP")]


def _which(name):
    return f"/usr/bin/{name}"


@pytest.fixture
def project(tmp_path):
    create = tmp_path / "sql" / "create"
    insert = tmp_path / "sql" / "insert"
    create.mkdir(parents=True)
    insert.mkdir(parents=True)
    (create / "001_schema.sql").write_text("CREATE DATABASE app;\nCREATE TABLE app.users (id INT);\n", encoding="utf-8")
    (insert / "001_seed.sql").write_text("INSERT INTO app.users VALUES (1);\n", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def forbid_prompts(monkeypatch):
    def unexpected(*args, **kwargs):
        raise AssertionError("unexpected prompt")

    monkeypatch.setattr(prompts, "confirm", unexpected)
    monkeypatch.setattr(prompts, "ask_text", unexpected)
    monkeypatch.setattr(prompts, "ask_password", unexpected)


def _settings(root, **overrides):
    values = {"root": root, "password": "pw"}
    values.update(overrides)
    return ResetSettings(**values)


def test_fresh_drops_named_schema_before_create(project):
    fake = FakeMysql()

    reset_database(_settings(project, database="legacy", delete=True), interactive=True, runner=fake, which=_which)

    assert fake.statements == ["SHOW DATABASES", "DROP DATABASE IF EXISTS `legacy`"]
    drop_index = next(i for i, (command, _) in enumerate(fake.calls) if command[-1].startswith("DROP"))
    create_index = next(i for i, (_, sql_text) in enumerate(fake.calls) if sql_text and b"CREATE" in sql_text)
    assert drop_index < create_index
    assert len(fake.scripts) == 2


def test_initial_never_deletes_or_prompts(project):
    fake = FakeMysql()

    reset_database(_settings(project, delete=False), interactive=True, runner=fake, which=_which)

    assert fake.drops == []
    assert len(fake.scripts) == 2


def test_no_insert_runs_only_create_batch(project):
    fake = FakeMysql()

    reset_database(_settings(project, delete=False, skip_insert=True), interactive=True, runner=fake, which=_which)

    assert len(fake.scripts) == 1
    assert b"INSERT" not in fake.scripts[0]


def test_failed_create_batch_skips_insert(project):
    fake = FakeMysql(fail={"create"})

    with pytest.raises(BatchFailedError):
        reset_database(_settings(project, delete=False), interactive=True, runner=fake, which=_which)

    assert len(fake.scripts) == 1


def test_missing_fixtures_fail_before_client_is_used(tmp_path):
    fake = FakeMysql()

    with pytest.raises(FixturesMissingError):
        reset_database(_settings(tmp_path), interactive=False, runner=fake, which=_which)

    assert fake.calls == []


def test_missing_client_fails_before_connecting(project):
    fake = FakeMysql()

    with pytest.raises(ClientMissingError):
        reset_database(_settings(project), interactive=False, runner=fake, which=lambda name: None)

    assert fake.calls == []


def test_connection_failure_precedes_any_drop(project):
    fake = FakeMysql(fail={"connect"})

    with pytest.raises(ConnectionFailedError):
        reset_database(_settings(project, database="app", delete=True), interactive=False, runner=fake, which=_which)

    assert fake.drops == []
    assert fake.scripts == []


def test_password_is_prompted_before_client_runs(project, monkeypatch):
    fake = FakeMysql()
    monkeypatch.setattr(prompts, "ask_password", lambda question: "typed")

    reset_database(_settings(project, password=None, delete=False), interactive=True, runner=fake, which=_which)

    assert all("--password=typed" in command for command, _ in fake.calls)


def test_interactive_selection_drops_chosen_schema(project, monkeypatch):
    fake = FakeMysql()
    answers = iter([True, True])
    monkeypatch.setattr(prompts, "confirm", lambda question, **kwargs: next(answers))
    monkeypatch.setattr(prompts, "ask_text", lambda question: "shop")

    reset_database(_settings(project), interactive=True, runner=fake, which=_which)

    assert fake.drops == ["DROP DATABASE IF EXISTS `shop`"]
    assert len(fake.scripts) == 2


def test_declining_selection_confirmation_aborts(project, monkeypatch):
    fake = FakeMysql()
    answers = iter([True, False])
    monkeypatch.setattr(prompts, "confirm", lambda question, **kwargs: next(answers))
    monkeypatch.setattr(prompts, "ask_text", lambda question: "shop")

    with pytest.raises(UserAbortedError):
        reset_database(_settings(project), interactive=True, runner=fake, which=_which)

    assert fake.drops == []
    assert fake.scripts == []


def test_unknown_schema_selection_never_drops(project, monkeypatch):
    fake = FakeMysql()
    monkeypatch.setattr(prompts, "confirm", lambda question, **kwargs: True)
    monkeypatch.setattr(prompts, "ask_text", lambda question: "nope")

    with pytest.raises(InvalidSchemaError):
        reset_database(_settings(project), interactive=True, runner=fake, which=_which)

    assert fake.drops == []


def test_drop_failure_is_reported_as_batch_failure(project):
    fake = FakeMysql(fail={"drop"})

    with pytest.raises(BatchFailedError) as err:
        reset_database(_settings(project, database="app", delete=True), interactive=False, runner=fake, which=_which)

    assert err.value.detail == "drop denied"
    assert fake.scripts == []


def test_should_delete_skips_silently_when_not_interactive():
    assert should_delete(ResetSettings(), interactive=False) is False
    assert should_delete(ResetSettings(delete=True), interactive=False) is True
    assert should_delete(ResetSettings(delete=False), interactive=True) is False
