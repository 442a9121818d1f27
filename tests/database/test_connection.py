from __future__ import annotations

import threading

from src.face_attendance.face_attendance.database import connection
from src.face_attendance.face_attendance.database.connection import AWSConfig, ThreadLocalTable


class _Resource:
    def __init__(self, created, endpoint_url):
        self.created = created
        self.endpoint_url = endpoint_url

    def Table(self, name):
        table = _Table(name, threading.get_ident())
        self.created.append(table)
        return table


class _Table:
    def __init__(self, name, thread_id):
        self.name = name
        self.thread_id = thread_id

    def get_item(self, **kwargs):
        return {"owner": self.thread_id}


class _Session:
    def __init__(self, created):
        self.created = created

    def resource(self, service, endpoint_url=None):
        assert service == "dynamodb"
        return _Resource(self.created, endpoint_url)


def test_table_handle_is_built_once_per_thread(monkeypatch):
    created = []
    monkeypatch.setattr(connection, "_new_session", lambda config: _Session(created))
    table = ThreadLocalTable(AWSConfig(region="us-east-1", endpoint_url="http://localhost:8000"), "Users")

    main_owner = table.get_item(Key={"userId": "1"})["owner"]
    assert table.get_item(Key={"userId": "2"})["owner"] == main_owner

    seen = []
    worker = threading.Thread(target=lambda: seen.append(table.get_item(Key={"userId": "3"})["owner"]))
    worker.start()
    worker.join()

    assert seen and seen[0] != main_owner
    assert [t.name for t in created] == ["Users", "Users"]
    assert table.name == "Users"
