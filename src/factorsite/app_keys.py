"""Application keys for type-safe app configuration access."""

from aiohttp import web
from jinja2 import Environment

from factorsite.core.dispatcher import PageDispatcher

dispatcher_key = web.AppKey("dispatcher", PageDispatcher)
templates_key = web.AppKey("templates", Environment)
verbose_key = web.AppKey("verbose", bool)
