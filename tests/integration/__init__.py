"""Integration tests.

test_api_server.py runs the FastAPI app in-process with a fake provider.
test_real_search_apis.py calls the real Tavily API and is marked
@pytest.mark.integration; it skips when no key is configured.

Run only live API tests:
    pytest tests/integration/ -v -s -m integration

Skip integration tests during regular testing:
    pytest tests/ --ignore=tests/integration/
"""
