"""
Async client for the Word Game DB API.

Mirrors what the demo page does before and after each request: it refuses
obviously incomplete requests locally, turns JSON error bodies into
``ApiClientError`` and reports timeouts as "Request timed out".
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..config import settings

PREVIEW_CHARS = 200

FILTER_PARAMS = (
    "category",
    "_id",
    "numLetters",
    "minLetters",
    "maxLetters",
    "numSyllables",
    "minSyllables",
    "maxSyllables",
    "limit",
    "offset",
)


class ApiClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RequestTimedOut(ApiClientError):
    def __init__(self):
        super().__init__("Request timed out")


def handle_api_response(resp: httpx.Response) -> Any:
    content_type = resp.headers.get("content-type", "")
    if "application/json" not in content_type:
        text = resp.text
        preview = text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")
        raise ApiClientError(f"Server returned non-JSON response: {preview}", resp.status_code)

    data = resp.json()
    if resp.is_error:
        message = data.get("error") if isinstance(data, dict) else None
        raise ApiClientError(message or f"HTTP {resp.status_code}: {resp.reason_phrase}", resp.status_code)
    return data


def _filter_params(filters: Dict[str, Any]) -> Dict[str, str]:
    unknown = set(filters) - set(FILTER_PARAMS)
    if unknown:
        raise ValueError(f"Unknown filter parameters: {', '.join(sorted(unknown))}")
    return {k: str(v) for k, v in filters.items() if v is not None and v != ""}


def build_word_payload(
    word: Optional[str],
    category: Optional[str],
    num_letters: Any,
    num_syllables: Any,
    hint: Optional[str],
) -> Dict[str, Any]:
    if not word or not category or not num_letters or not num_syllables or not hint:
        raise ValueError("Please fill in all required fields")
    return {
        "word": word,
        "category": category,
        "numLetters": int(num_letters),
        "numSyllables": int(num_syllables),
        "hint": hint,
    }


def build_update_payload(
    word: Optional[str] = None,
    category: Optional[str] = None,
    num_letters: Any = None,
    num_syllables: Any = None,
    hint: Optional[str] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if word:
        payload["word"] = word
    if category:
        payload["category"] = category
    if num_letters:
        payload["numLetters"] = int(num_letters)
    if num_syllables:
        payload["numSyllables"] = int(num_syllables)
    if hint:
        payload["hint"] = hint

    if not payload:
        raise ValueError("Please fill in at least one field to update")
    return payload


class WordGameClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        version: str = "v1",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{base}/api/{version}",
            timeout=timeout if timeout is not None else settings.request_timeout_sec,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "WordGameClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimedOut() from exc
        return handle_api_response(resp)

    # ---------- Reads ----------

    async def list_words(self, **filters: Any) -> Any:
        return await self._request("GET", "/words", params=_filter_params(filters))

    async def get_word(self, word_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/words/{word_id}")

    async def random_word(self, **filters: Any) -> Dict[str, Any]:
        return await self._request("GET", "/words/random", params=_filter_params(filters))

    async def search_words(
        self,
        query: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Dict[str, Any]:
        query = (query or "").strip()
        if not query:
            raise ValueError("Please enter a search query")
        params: Dict[str, str] = {"q": query}
        if limit is not None:
            params["limit"] = str(limit)
        if offset is not None:
            params["offset"] = str(offset)
        return await self._request("GET", "/words/search", params=params)

    async def list_categories(self) -> List[str]:
        return await self._request("GET", "/categories")

    async def get_config(self) -> Dict[str, Any]:
        return await self._request("GET", "/config")

    # ---------- Writes ----------

    async def create_word(
        self,
        word: str,
        category: str,
        num_letters: Any,
        num_syllables: Any,
        hint: str,
    ) -> Dict[str, Any]:
        payload = build_word_payload(word, category, num_letters, num_syllables, hint)
        return await self._request("POST", "/words", json=payload)

    async def update_word(self, word_id: str, **fields: Any) -> Dict[str, Any]:
        if not word_id:
            raise ValueError("Please enter a word ID to update")
        payload = build_update_payload(**fields)
        return await self._request("PUT", f"/words/{word_id}", json=payload)

    async def delete_word(self, word_id: str) -> Dict[str, Any]:
        if not word_id:
            raise ValueError("Please enter a valid word ID to delete")
        return await self._request("DELETE", f"/words/{word_id}")


# ---------- Command line ----------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query a running Word Game DB API")
    parser.add_argument("--base-url", default=None, help="defaults to API_BASE_URL")
    parser.add_argument("--version", choices=("v1", "v2"), default="v1")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("config", help="show whether writes are enabled")
    sub.add_parser("categories", help="list distinct categories")

    random_cmd = sub.add_parser("random", help="pick a random word")
    random_cmd.add_argument("--category")

    search_cmd = sub.add_parser("search", help="search words by substring")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--limit", type=int)

    get_cmd = sub.add_parser("get", help="fetch one word by id")
    get_cmd.add_argument("word_id")
    return parser


async def run_command(client: WordGameClient, args: argparse.Namespace) -> Any:
    if args.command == "config":
        return await client.get_config()
    if args.command == "categories":
        return await client.list_categories()
    if args.command == "random":
        return await client.random_word(category=args.category)
    if args.command == "search":
        return await client.search_words(args.query, limit=args.limit)
    if args.command == "get":
        return await client.get_word(args.word_id)
    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    async with WordGameClient(base_url=args.base_url, version=args.version) as client:
        try:
            result = await run_command(client, args)
        except (ApiClientError, ValueError) as exc:
            print(f"[client] {exc}")
            return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
