from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional

import boto3


@dataclass
class AWSConfig:
    region: str
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None


@dataclass
class TableNames:
    users: str = "Users"
    sessions: str = "AttendanceSessions"
    attendance: str = "Attendance"
    timetable: str = "Timetable"


def _new_session(config: AWSConfig) -> boto3.session.Session:
    return boto3.session.Session(
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
    )


class ThreadLocalTable:
    """DynamoDB Table handle that is rebuilt once per thread.

    boto3 sessions and resources must not be shared between threads; the
    fan-out pools in the services call repositories from worker threads.
    """

    def __init__(self, config: AWSConfig, name: str):
        self._config = config
        self.name = name
        self._local = threading.local()

    def _table(self):
        table = getattr(self._local, "table", None)
        if table is None:
            kwargs = {"endpoint_url": self._config.endpoint_url} if self._config.endpoint_url else {}
            table = _new_session(self._config).resource("dynamodb", **kwargs).Table(self.name)
            self._local.table = table
        return table

    def __getattr__(self, attr: str) -> Any:
        return getattr(self._table(), attr)


class AWSClients:
    """Factory for the boto3 handles used by the repositories and adapters.

    Note: Built once by the container and passed explicitly to each consumer.
    Low-level clients are thread-safe and shared; tables are per thread.
    """

    def __init__(self, config: AWSConfig):
        self._config = config
        self._session = _new_session(config)

    def _kwargs(self) -> dict[str, Any]:
        return {"endpoint_url": self._config.endpoint_url} if self._config.endpoint_url else {}

    def table(self, name: str) -> ThreadLocalTable:
        return ThreadLocalTable(self._config, name)

    def dynamodb_client(self):
        return self._session.client("dynamodb", **self._kwargs())

    def rekognition(self):
        return self._session.client("rekognition", **self._kwargs())

    def s3(self):
        return self._session.client("s3", **self._kwargs())
