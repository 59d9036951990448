"""Tests for KeybaseEnricher chunked picture lookup."""

import asyncio

import httpx
import pytest

from sessionsync.enrichment.keybase import KeybaseEnricher
from sessionsync.models.validator import Validator

PICTURES = {
    "AAAA": "https://s3.keybase.test/a.jpg",
    "BBBB": "https://s3.keybase.test/b.jpg",
    "CCCC": "https://s3.keybase.test/c.jpg",
}


def _handler(request: httpx.Request) -> httpx.Response:
    identity = request.url.params["key_suffix"]
    if identity == "BROKEN":
        return httpx.Response(500)
    url = PICTURES.get(identity)
    if url is None:
        return httpx.Response(200, json={"status": {"code": 0}, "them": []})
    return httpx.Response(200, json={"them": [{"pictures": {"primary": {"url": url}}}]})


def _enricher(chunk_size: int = 2) -> KeybaseEnricher:
    client = httpx.AsyncClient(
        base_url="https://keybase.test", transport=httpx.MockTransport(_handler),
    )
    return KeybaseEnricher(chunk_size=chunk_size, client=client)


def _run(enricher, validators) -> list[list[Validator]]:
    chunks: list[list[Validator]] = []
    asyncio.run(enricher.enrich(validators, chunks.append))
    return chunks


class TestKeybaseEnricher:
    def test_delivers_in_chunks(self):
        validators = [
            Validator(operator_address="v1", identity="AAAA"),
            Validator(operator_address="v2", identity="BBBB"),
            Validator(operator_address="v3", identity="CCCC"),
        ]
        chunks = _run(_enricher(chunk_size=2), validators)
        assert [len(c) for c in chunks] == [2, 1]
        assert chunks[0][0].picture == PICTURES["AAAA"]
        assert chunks[1][0].operator_address == "v3"

    def test_skips_without_identity_or_with_picture(self):
        validators = [
            Validator(operator_address="v1"),
            Validator(operator_address="v2", identity="AAAA", picture="set.png"),
            Validator(operator_address="v3", identity="BBBB"),
        ]
        chunks = _run(_enricher(), validators)
        assert [[v.operator_address for v in c] for c in chunks] == [["v3"]]

    def test_failed_and_unknown_lookups_left_out(self):
        validators = [
            Validator(operator_address="v1", identity="BROKEN"),
            Validator(operator_address="v2", identity="NOPE"),
        ]
        assert _run(_enricher(), validators) == []

    def test_keeps_other_fields(self):
        validators = [Validator(operator_address="v1", name="Alpha", identity="AAAA", tokens=5.0)]
        chunk = _run(_enricher(), validators)[0]
        assert chunk[0].name == "Alpha"
        assert chunk[0].tokens == 5.0

    def test_rejects_bad_chunk_size(self):
        with pytest.raises(ValueError):
            KeybaseEnricher(chunk_size=0)
