from __future__ import annotations

import logging
import random
from datetime import datetime
from enum import Enum

from cmdbot.commands.context import CommandContext
from cmdbot.commands.manifest import CommandManifest, param
from cmdbot.commands.models import ParamType

logger = logging.getLogger(__name__)


class TemperatureUnit(Enum):
    C = "celsius"
    F = "fahrenheit"
    K = "kelvin"


# --- /start ---

start = CommandManifest("start", "Greet the user")


@start.variant("/start")
async def cmd_start(context: CommandContext) -> str:
    return f"Hi {context.sender}! Type /help to see what I can do."


# --- /ping ---

ping = CommandManifest("ping", "Check that the bot is alive")


@ping.variant("/ping")
async def cmd_ping(context: CommandContext) -> str:
    return "pong"


# --- /echo ---

echo = CommandManifest("echo", "Repeat a message back, exactly as typed")


@echo.variant("/echo <text>", param("text", str, help="Any text, quotes included"))
async def cmd_echo(context: CommandContext, text: str) -> str:
    if not text:
        return "Usage: /echo <text>"
    return text


# --- /roll ---

roll = CommandManifest("roll", "Roll a die or pick a number in a range")


@roll.variant("/roll — roll a six-sided die")
async def cmd_roll(context: CommandContext) -> str:
    return f"🎲 {random.randint(1, 6)}"


@roll.variant("/roll <sides>", param("sides", int, help="Number of sides"))
async def cmd_roll_sides(context: CommandContext, sides: int) -> str:
    if sides < 1:
        return "A die needs at least one side."
    return f"🎲 {random.randint(1, sides)} (d{sides})"


@roll.variant("/roll <low> <high>", param("low", int), param("high", int))
async def cmd_roll_range(context: CommandContext, low: int, high: int) -> str:
    if low > high:
        low, high = high, low
    return f"🎲 {random.randint(low, high)} ({low}-{high})"


# --- /convert ---

convert = CommandManifest("convert", "Convert a temperature between units")


def convert_temperature(value: float, source: TemperatureUnit, target: TemperatureUnit) -> float:
    if source is TemperatureUnit.F:
        celsius = (value - 32) * 5 / 9
    elif source is TemperatureUnit.K:
        celsius = value - 273.15
    else:
        celsius = value

    if target is TemperatureUnit.F:
        return celsius * 9 / 5 + 32
    if target is TemperatureUnit.K:
        return celsius + 273.15
    return celsius


@convert.variant(
    "/convert <value> <from> <to>",
    param("value", float),
    param("source", TemperatureUnit, help="Unit to convert from"),
    param("target", TemperatureUnit, help="Unit to convert to"),
)
async def cmd_convert(
    context: CommandContext, value: float, source: TemperatureUnit, target: TemperatureUnit
) -> str:
    result = convert_temperature(value, source, target)
    return f"{value:g}°{source.name} = {result:.2f}°{target.name}"


@convert.variant("/convert <anything else> — show usage", param("text", str))
async def cmd_convert_usage(context: CommandContext, text: str) -> str:
    units = ", ".join(TemperatureUnit.__members__)
    return f"Usage: /convert <value> <from> <to>, units: {units} (e.g. /convert 21.5 C F)"


# --- /days ---

days = CommandManifest("days", "Count the days until (or between) dates")


@days.variant("/days <date>", param("date", datetime, help="Target date, e.g. 2025-12-24"))
async def cmd_days_until(context: CommandContext, date: datetime) -> str:
    delta = date.date() - datetime.now().date()
    if delta.days < 0:
        return f"{date:%Y-%m-%d} was {-delta.days} days ago."
    return f"{delta.days} days until {date:%Y-%m-%d}."


@days.variant(
    "/days <start> <end>",
    param("start", ParamType.DATETIME),
    param("end", ParamType.DATETIME),
)
async def cmd_days_between(context: CommandContext, start: datetime, end: datetime) -> str:
    return f"{abs((end.date() - start.date()).days)} days between {start:%Y-%m-%d} and {end:%Y-%m-%d}."


BUILTIN_MANIFESTS: list[CommandManifest] = [start, ping, echo, roll, convert, days]
