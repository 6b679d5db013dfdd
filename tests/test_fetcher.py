"""
Tests for the typed API fetchers against the fake API.
"""
import logging

import httpx
import pytest

from gw2api.errors import SchemaError, TransportError
from gw2api.fetcher import ResourceFetcher, chunked
from gw2api.rate_limiter import NoopRateLimiter, RateLimitedClient
from randomizer.storylines import STORYLINES

from conftest import API_BASE, TOKEN, FakeGw2Api


def make_fetcher(http: httpx.AsyncClient, batch_size: int = 100) -> ResourceFetcher:
    return ResourceFetcher(RateLimitedClient(http, NoopRateLimiter()), TOKEN, quest_batch_size=batch_size)


class TestCharacters:
    """Test character endpoints."""
    
    @pytest.mark.asyncio
    async def test_character_names_are_authenticated(self, fetcher, fake_api):
        """The character list is requested with the access token."""
        names = await fetcher.fetch_character_names()
        
        assert names == ["Aria", "Bram"]
        request = fake_api.requests_to("/characters")[0]
        assert request.url.params["access_token"] == TOKEN
    
    @pytest.mark.asyncio
    async def test_fetch_character(self, fetcher):
        """Core record is parsed, extra fields ignored."""
        character = await fetcher.fetch_character("Aria")
        
        assert character.name == "Aria"
        assert character.race == "Human"
        assert character.profession == "Guardian"
    
    @pytest.mark.asyncio
    async def test_fetch_characters_keyed_by_name(self, fetcher, fake_api):
        """Concurrent character fetches come back keyed and sorted by name."""
        characters = await fetcher.fetch_characters(["Bram", "Aria"])
        
        assert list(characters) == ["Aria", "Bram"]
        assert characters["Bram"].profession == "Engineer"
        assert len(fake_api.requests_to("/characters/Aria/core")) == 1
        assert len(fake_api.requests_to("/characters/Bram/core")) == 1
    
    @pytest.mark.asyncio
    async def test_fetch_completed_quests(self, fetcher, fake_api):
        """Completed quest ids come back as a set."""
        completed = await fetcher.fetch_completed_quests("Aria")
        
        assert completed == {1001, 1002, 1101, 9999}
        request = fake_api.requests_to("/characters/Aria/quests")[0]
        assert request.url.params["access_token"] == TOKEN
    
    @pytest.mark.asyncio
    async def test_fetch_completed_quests_for_many(self, fetcher):
        """Completed sets for several characters are keyed by name."""
        completed = await fetcher.fetch_completed_quests_for(["Bram", "Aria"])
        
        assert list(completed) == ["Aria", "Bram"]
        assert completed["Bram"] == set()


class TestSeasonsAndQuests:
    """Test reference data endpoints."""
    
    @pytest.mark.asyncio
    async def test_fetch_seasons(self, fetcher, fake_api):
        """One request per storyline, keyed by season id."""
        seasons = await fetcher.fetch_seasons(storyline.id for storyline in STORYLINES)
        
        assert set(seasons) == {storyline.id for storyline in STORYLINES}
        assert seasons[STORYLINES[0].id].story_ids == {1, 2}
        assert len(fake_api.requests) == len(STORYLINES)
        # Reference data needs no token
        assert all("access_token" not in request.url.params for request in fake_api.requests)
    
    @pytest.mark.asyncio
    async def test_quests_are_fetched_in_batches(self):
        """250 quest ids take three batch requests of at most 100 ids."""
        quests = [
            {"id": quest_id, "name": f"Quest {quest_id}", "level": 1, "story": 1, "goals": []}
            for quest_id in range(1, 251)
        ]
        fake_api = FakeGw2Api(quests=quests)
        
        async with httpx.AsyncClient(base_url=API_BASE, transport=fake_api.transport()) as http:
            catalog = await make_fetcher(http).fetch_quest_catalog()
        
        assert len(catalog) == 250
        assert list(catalog) == list(range(1, 251))
        assert catalog[17].story_id == 1
        
        batches = [request for request in fake_api.requests_to("/quests") if "ids" in request.url.params]
        assert len(batches) == 3
        batch_sizes = sorted(len(request.url.params["ids"].split(",")) for request in batches)
        assert batch_sizes == [50, 100, 100]
        first_ids = sorted(request.url.params["ids"] for request in batches)
        assert ",".join(str(i) for i in range(1, 101)) in first_ids
    
    @pytest.mark.asyncio
    async def test_empty_quest_list(self, fetcher):
        """No ids means no batch requests."""
        assert await fetcher.fetch_quests([]) == {}


class TestFailures:
    """Test how failures surface."""
    
    @pytest.mark.asyncio
    async def test_error_status_is_transport_error(self, fetcher, fake_api):
        """Non-success status raises TransportError."""
        fake_api.fail("/characters", 503)
        
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch_character_names()
        assert exc_info.value.url == "/characters"
    
    @pytest.mark.asyncio
    async def test_error_status_hides_access_token(self, fetcher, fake_api, caplog):
        """Neither the error nor the log line carries the access token."""
        fake_api.fail("/characters", 503)
        
        with caplog.at_level(logging.DEBUG, logger="gw2api"):
            with pytest.raises(TransportError) as exc_info:
                await fetcher.fetch_character_names()
        
        assert "503" in str(exc_info.value)
        assert TOKEN not in str(exc_info.value)
        assert "/characters" in caplog.text
        assert TOKEN not in caplog.text
    
    @pytest.mark.asyncio
    async def test_network_error_hides_access_token(self, caplog):
        """Connection failures on authenticated requests do not leak the token."""
        def handler(request):
            raise httpx.ConnectError(f"connection refused: {request.url}", request=request)
        
        async with httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(handler)) as http:
            with caplog.at_level(logging.DEBUG, logger="gw2api"):
                with pytest.raises(TransportError) as exc_info:
                    await make_fetcher(http).fetch_character("Aria")
        
        assert "ConnectError" in str(exc_info.value)
        assert TOKEN not in str(exc_info.value)
        assert TOKEN not in caplog.text
    
    @pytest.mark.asyncio
    async def test_bad_token_is_transport_error(self, fake_api):
        """A rejected token is a transport failure."""
        async with httpx.AsyncClient(base_url=API_BASE, transport=fake_api.transport()) as http:
            fetcher = ResourceFetcher(RateLimitedClient(http, NoopRateLimiter()), "wrong")
            with pytest.raises(TransportError):
                await fetcher.fetch_character_names()
    
    @pytest.mark.asyncio
    async def test_network_error_is_transport_error(self):
        """Connection failures raise TransportError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        
        async with httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(handler)) as http:
            with pytest.raises(TransportError):
                await make_fetcher(http).fetch_quest_ids()
    
    @pytest.mark.asyncio
    async def test_wrong_shape_is_schema_error(self, fetcher, fake_api):
        """A body of the wrong shape raises SchemaError."""
        fake_api.malform("/characters/Aria/core")
        
        with pytest.raises(SchemaError):
            await fetcher.fetch_character("Aria")
    
    @pytest.mark.asyncio
    async def test_invalid_json_is_schema_error(self):
        """A body that is not JSON raises SchemaError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
        
        async with httpx.AsyncClient(base_url=API_BASE, transport=transport) as http:
            with pytest.raises(SchemaError):
                await make_fetcher(http).fetch_quest_ids()
    
    @pytest.mark.asyncio
    async def test_one_failing_request_aborts_stage(self, fetcher, fake_api):
        """A single failing season aborts the whole season stage."""
        fake_api.fail(f"/stories/seasons/{STORYLINES[3].id}")
        
        with pytest.raises(TransportError):
            await fetcher.fetch_seasons(storyline.id for storyline in STORYLINES)


class TestChunked:
    """Test the batching helper."""
    
    def test_chunks(self):
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
        assert chunked([], 100) == []
    
    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunked([1], 0)
