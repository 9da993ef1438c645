# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent decodes with different providers must not interfere."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from safe_decoder import Configuration, SafeDecoder
from tests.fixtures.models import Epidemic


class PlaceholderTitles:
    configuration = Configuration.builder().register(str, "n/a").register(int, -1).build()


def _decode(decoder: SafeDecoder, use_provider: bool, data: bytes) -> list[Epidemic]:
    if use_provider:
        return decoder.decode(list[Epidemic], PlaceholderTitles, data)
    return decoder.decode(list[Epidemic], data)


def test_parallel_decodes_keep_their_own_configuration(safe_decoder: SafeDecoder, encode) -> None:
    data = encode([{"title": "a"}, {"num": 2}])
    jobs = [index % 2 == 0 for index in range(64)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda flag: (flag, _decode(safe_decoder, flag, data)), jobs))

    for use_provider, result in results:
        if use_provider:
            assert result == [Epidemic("a", -1, "n/a"), Epidemic("n/a", 2, "n/a")]
        else:
            assert result == [Epidemic("a", 0, ""), Epidemic("", 2, "")]
