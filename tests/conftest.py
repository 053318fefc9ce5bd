from __future__ import annotations

import pytest

from exline.core.collaborators import Collaborators
from exline.core.executor import ExInterpreter
from exline.core.memory import memory_collaborators


@pytest.fixture()
def env() -> Collaborators:
    return memory_collaborators()


@pytest.fixture()
def interpreter(env: Collaborators) -> ExInterpreter:
    return ExInterpreter(env, home_dir="/home/tester")
