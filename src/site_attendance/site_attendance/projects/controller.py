from __future__ import annotations

from flask import Flask

from ..container import Container
from ..sync.controller import register_table


def register(app: Flask, container: Container) -> None:
    register_table(app, container.tables["projects"])
