"""전역 테스트 설정

역할:
- 테스트 환경 구성 (설정 로드 전에 환경 변수 지정)
- 공통 Fake 저장소/제공자 주입
- 전역 상태 초기화
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# 설정은 import 시점에 로드되므로 가장 먼저 지정
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["CACHE_BACKEND"] = "firestore"

# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from amazon_products.core.exceptions import ProviderException  # noqa: E402
from tests.doubles import FakeCacheStore, FakeProvider, make_product  # noqa: E402


@pytest.fixture
def fake_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(products=[make_product("B0PHONE001"), make_product("B0PHONE002")])


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(error=ProviderException("Amazon search failed: RequestError"))


@pytest.fixture(autouse=True)
def reset_route_singletons():
    """라우트 싱글톤/의존성 오버라이드 초기화"""
    from amazon_products.api.routes import product_routes
    from amazon_products.app import app

    yield
    product_routes._cache_adapter = None
    product_routes._provider = None
    product_routes._orchestrator = None
    app.dependency_overrides.clear()
