"""
Shared fixtures: an in-memory Guild Wars 2 API served through httpx.MockTransport.
"""
import asyncio
import random

import httpx
import pytest
import pytest_asyncio

from gw2api.fetcher import ResourceFetcher
from gw2api.rate_limiter import NoopRateLimiter, RateLimitedClient
from randomizer.storylines import STORYLINES

API_BASE = "https://api.guildwars2.com/v2"
TOKEN = "test-token"


def story_ids_for(index: int) -> list:
    """Story ids of the n-th storyline's season: n*10+1 and n*10+2."""
    return [index * 10 + 1, index * 10 + 2]


class FakeGw2Api:
    """Minimal stand-in for the endpoints the generator calls."""
    
    def __init__(self, characters=None, completed=None, quests=None, token=TOKEN):
        self.token = token
        self.characters = characters if characters is not None else {
            "Aria": {"name": "Aria", "race": "Human", "profession": "Guardian", "level": 80},
            "Bram": {"name": "Bram", "race": "Charr", "profession": "Engineer", "level": 12},
        }
        self.completed = completed if completed is not None else {
            # 9999 is not in the quest catalog
            "Aria": [1001, 1002, 1101, 9999],
            "Bram": [],
        }
        self.seasons = {
            storyline.id: {
                "id": storyline.id,
                "name": storyline.key,
                "order": index,
                "stories": story_ids_for(index),
            }
            for index, storyline in enumerate(STORYLINES)
        }
        self.quests = quests if quests is not None else [
            {"id": 1001, "name": "Prologue", "level": 1, "story": 1, "goals": []},
            {"id": 1002, "name": "Tutorial", "level": 1, "story": 1, "goals": []},
            {"id": 1003, "name": "Chapter 1", "level": 10, "story": 2, "goals": []},
            {"id": 1101, "name": "Season 1 start", "level": 80, "story": 11, "goals": []},
            {"id": 1201, "name": "Season 2 start", "level": 80, "story": 21, "goals": []},
        ]
        self.failures = {}
        self.malformed = set()
        self.requests = []
    
    def fail(self, path: str, status_code: int = 500):
        """Answer requests to path with an error status."""
        self.failures[path] = status_code
    
    def malform(self, path: str):
        """Answer requests to path with a body of the wrong shape."""
        self.malformed.add(path)
    
    def requests_to(self, path: str) -> list:
        return [request for request in self.requests if self._path(request) == path]
    
    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/v2"):] if path.startswith("/v2") else path
    
    def _authorized(self, request: httpx.Request) -> bool:
        return request.url.params.get("access_token") == self.token
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._path(request)
        
        if path in self.failures:
            return httpx.Response(self.failures[path], json={"text": "error"})
        if path in self.malformed:
            return httpx.Response(200, json={"unexpected": True})
        
        parts = path.strip("/").split("/")
        
        if parts[0] == "characters":
            if not self._authorized(request):
                return httpx.Response(401, json={"text": "Invalid access token"})
            if len(parts) == 1:
                return httpx.Response(200, json=list(self.characters))
            name = parts[1]
            if name not in self.characters:
                return httpx.Response(404, json={"text": "no such character"})
            if parts[2] == "core":
                return httpx.Response(200, json=self.characters[name])
            if parts[2] == "quests":
                return httpx.Response(200, json=self.completed.get(name, []))
        
        if parts[:2] == ["stories", "seasons"] and len(parts) == 3:
            season = self.seasons.get(parts[2])
            if season is None:
                return httpx.Response(404, json={"text": "no such id"})
            return httpx.Response(200, json=season)
        
        if parts == ["quests"]:
            ids = request.url.params.get("ids")
            if ids is None:
                return httpx.Response(200, json=[quest["id"] for quest in self.quests])
            wanted = {int(quest_id) for quest_id in ids.split(",")}
            return httpx.Response(200, json=[quest for quest in self.quests if quest["id"] in wanted])
        
        return httpx.Response(404, json={"text": "not found"})
    
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
    
    def jittered_transport(self, seed: int, max_delay: float = 0.01) -> httpx.MockTransport:
        """Transport that delays every response by a random amount, so completion order varies with the seed."""
        rng = random.Random(seed)
        
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(rng.uniform(0, max_delay))
            return self.handler(request)
        
        return httpx.MockTransport(handler)


@pytest.fixture
def fake_api():
    """Fake API with two account characters and a small quest catalog."""
    return FakeGw2Api()


@pytest_asyncio.fixture
async def fetcher(fake_api):
    """ResourceFetcher talking to the fake API without rate limiting."""
    async with httpx.AsyncClient(base_url=API_BASE, transport=fake_api.transport()) as http:
        yield ResourceFetcher(RateLimitedClient(http, NoopRateLimiter()), TOKEN)
