#!/usr/bin/env python3
"""
Joke Tools - Chuck Norris, dad and Yo Momma jokes

Fixed-URL, unauthenticated GETs against three public joke APIs.
"""
import aiohttp

from base_tool import BaseTool, ToolResult
from upstream import expect_field, expect_list, fetch_json

CHUCK_RANDOM_URL = "https://api.chucknorris.io/jokes/random"
CHUCK_CATEGORIES_URL = "https://api.chucknorris.io/jokes/categories"
DAD_JOKE_URL = "https://icanhazdadjoke.com/"
YO_MOMMA_URL = "https://www.yomama-jokes.com/api/v1/jokes/random/"


class JokeTool(BaseTool):
    """Common constructor for tools backed by the shared client session"""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session


class ChuckJokeTool(JokeTool):
    name = "get-chuck-joke"
    description = "Get a random Chuck Norris joke"

    async def execute(self) -> ToolResult:
        data = await fetch_json(self.session, CHUCK_RANDOM_URL, service="Chuck Norris API")
        return ToolResult.text(expect_field(data, "value", service="Chuck Norris API"))


class ChuckJokeByCategoryTool(JokeTool):
    name = "get-chuck-joke-by-category"
    description = "Get a random Chuck Norris joke by category"

    async def execute(self, category: str) -> ToolResult:
        """
        Args:
            category: Category of the Chuck Norris joke
        """
        data = await fetch_json(
            self.session, CHUCK_RANDOM_URL, service="Chuck Norris API", params={"category": category}
        )
        return ToolResult.text(expect_field(data, "value", service="Chuck Norris API"))


class ChuckCategoriesTool(JokeTool):
    name = "get-chuck-categories"
    description = "Get all available categories for Chuck Norris jokes"

    async def execute(self) -> ToolResult:
        data = await fetch_json(self.session, CHUCK_CATEGORIES_URL, service="Chuck Norris API")
        categories = expect_list(data, None, "Chuck Norris API")
        return ToolResult.text(", ".join(str(category) for category in categories))


class DadJokeTool(JokeTool):
    name = "get-dad-joke"
    description = "Get a random dad joke"

    async def execute(self) -> ToolResult:
        data = await fetch_json(self.session, DAD_JOKE_URL, service="icanhazdadjoke")
        return ToolResult.text(expect_field(data, "joke", service="icanhazdadjoke"))


class YoMommaJokeTool(JokeTool):
    name = "get-yo-momma-joke"
    description = "Get a random Yo Momma joke and its category"

    async def execute(self) -> ToolResult:
        data = await fetch_json(self.session, YO_MOMMA_URL, service="Yo Momma API")
        category = expect_field(data, "category", service="Yo Momma API")
        joke = expect_field(data, "joke", service="Yo Momma API")
        return ToolResult.text(f"Category: {category}\nJoke: {joke}")
