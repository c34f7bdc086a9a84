# kisan_saathi/api/websocket/actions.py
import json

from fastapi import HTTPException
from pydantic import ValidationError

from kisan_saathi.models.chat_session import GeneralChatRequest
from kisan_saathi.models.market import MarketAdviceRequest
from kisan_saathi.models.weather import WeatherAdviceRequest
from kisan_saathi.services.chat import chat_turn, create_chat_session
from kisan_saathi.services.market_advisory import advise_market
from kisan_saathi.services.market_filter import filter_market
from kisan_saathi.services.market_service import get_market_source
from kisan_saathi.services.weather_advisory import advise_weather, condition_glyph
from kisan_saathi.services.weather_service import get_weather_source

from .manager import manager


async def _send(connection_id: str, action: str, payload: dict) -> None:
    await manager.send_to_connection(
        connection_id, json.dumps({"action": action, **payload}, default=str)
    )


async def _send_error(connection_id: str, action: str, e: HTTPException) -> None:
    await _send(
        connection_id,
        action,
        {"error": {"status_code": e.status_code, "message": e.detail}},
    )


def _invalid_data(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=e.errors(include_url=False),
    )


async def general_chat_handler(connection_id: str, data: dict):
    try:
        request = GeneralChatRequest.model_validate(data)
        chat_id = request.chat_id
        if not chat_id:
            chat_id = (await create_chat_session()).id

        response = await chat_turn(chat_id, request.text)
        await _send(
            connection_id,
            "general_chat",
            {"data": {"chat_id": chat_id, **response.model_dump(mode="json")}},
        )
    except ValidationError as e:
        await _send_error(connection_id, "general_chat", _invalid_data(e))
    except HTTPException as e:
        await _send_error(connection_id, "general_chat", e)


async def weather_advice_handler(connection_id: str, data: dict):
    try:
        request = WeatherAdviceRequest.model_validate(data)
    except ValidationError as e:
        await _send_error(connection_id, "weather_advice", _invalid_data(e))
        return

    weather = await get_weather_source().get_current_weather(request.city)
    await _send(
        connection_id,
        "weather_advice",
        {
            "data": {
                "weather": weather.model_dump(mode="json"),
                "glyph": condition_glyph(weather.description),
                "tips": [tip.line for tip in advise_weather(weather)],
            }
        },
    )


async def market_advice_handler(connection_id: str, data: dict):
    try:
        request = MarketAdviceRequest.model_validate(data)
    except ValidationError as e:
        await _send_error(connection_id, "market_advice", _invalid_data(e))
        return

    prices = filter_market(
        await get_market_source().get_market_prices(),
        state=request.state,
        query=request.query,
    )
    await _send(
        connection_id,
        "market_advice",
        {
            "data": {
                "prices": [p.model_dump(mode="json") for p in prices],
                "insights": [tip.line for tip in advise_market(prices)],
            }
        },
    )


actions = {
    "general_chat": general_chat_handler,
    "weather_advice": weather_advice_handler,
    "market_advice": market_advice_handler,
}
