import pytest


def test_list_links_empty(client):
    response = client.get("/api/links")
    assert response.status_code == 200
    assert response.json() == []


def test_list_links_with_data(client, sample_urls):
    for url in sample_urls:
        client.post("/api/links", json={"original_url": url})

    data = client.get("/api/links").json()
    assert len(data) == len(sample_urls)
    # Newest first
    assert [item["original_url"] for item in data] == list(reversed(sample_urls))
    for item in data:
        assert item["short_url"] == f"https://sho.rt/{item['code']}"
        assert item["access_count"] == 0


def test_list_links_pagination(client):
    for i in range(15):
        client.post("/api/links", json={"original_url": f"https://example.com/{i}", "code": f"link{i:02d}"})

    first = client.get("/api/links?page=1&pageSize=10").json()
    assert [item["code"] for item in first] == [f"link{i:02d}" for i in range(14, 4, -1)]

    second = client.get("/api/links", params={"page": "2", "pageSize": "10"}).json()
    assert [item["code"] for item in second] == [f"link{i:02d}" for i in range(4, -1, -1)]

    assert client.get("/api/links?page=3").json() == []


def test_list_links_defaults_to_ten(client):
    for i in range(12):
        client.post("/api/links", json={"original_url": f"https://example.com/{i}"})

    assert len(client.get("/api/links").json()) == 10
    assert len(client.get("/api/links?pageSize=100").json()) == 12


@pytest.mark.parametrize("query", [
    "page=0",
    "page=-1",
    "page=abc",
    "pageSize=9",
    "pageSize=101",
    "pageSize=ten",
    "page=99999999999999999999",
])
def test_list_links_invalid_params(client, query):
    response = client.get(f"/api/links?{query}")
    assert response.status_code == 400
    assert response.json()["errors"]
