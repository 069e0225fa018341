"""Random fact fetched from api.chucknorris.io."""

from __future__ import annotations

import asyncio

import aiohttp

from devtools_cli.config import settings
from devtools_cli.exceptions import ActionError
from devtools_cli.logging import LoggerFactory
from devtools_cli.menu.model import Menu, MenuBuilder
from devtools_cli.modules.base import ActionContext, ActionSpec

FACT_URL = "https://api.chucknorris.io/jokes/random"

log = LoggerFactory.for_tools("chuck-norris-facts")


async def fetch_fact(url: str = FACT_URL, timeout_seconds: float | None = None) -> dict:
    """GET a fact and return the decoded JSON body.

    Raises:
        ActionError: Network failure, non-200 status or an undecodable body
    """
    if timeout_seconds is None:
        timeout_seconds = settings.get_int(
            "http_timeout_seconds", settings.DEFAULT_HTTP_TIMEOUT_SECONDS
        )
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        try:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise ActionError(f"unexpected status: {resp.status} {resp.reason}", "random-fact")
                try:
                    return await resp.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise ActionError(f"failed to decode response: {e}", "random-fact")
        except aiohttp.ClientError as e:
            log.error(f"Request to {url} failed: {e}")
            raise ActionError(f"request failed: {e}", "random-fact")
        except asyncio.TimeoutError:
            raise ActionError(f"request timed out after {timeout_seconds}s", "random-fact")


def format_fact(joke: dict) -> str:
    return f"{joke.get('value', '')}\n\nSource: {joke.get('url', '')}"


def random_fact(_context: ActionContext) -> str:
    return format_fact(asyncio.run(fetch_fact()))


class ChuckNorrisTool:
    tool_id = "chuck-norris-facts"
    label = "Chuck Norris Fact"
    description = "Fetch a random fact from api.chucknorris.io"

    def requirements(self):
        return ()

    def actions(self):
        return (
            ActionSpec(
                action_id="random-fact",
                label="Get random fact",
                description=f"Calls GET {FACT_URL}",
                usage="devtools run chuck-norris-facts random-fact",
                run=random_fact,
            ),
        )

    def menu(self) -> Menu:
        return (
            MenuBuilder("Chuck Norris Fact Tool")
            .action("Get random fact", f"Calls GET {FACT_URL}", lambda: random_fact(ActionContext()))
            .with_back()
            .build()
        )
