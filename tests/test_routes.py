"""Tests for the HTTP and WebSocket API."""

from typing import List

import pytest

from kisan_saathi.main import app
from kisan_saathi.models.weather import ForecastDay, WeatherReading
from kisan_saathi.services.weather_service import get_weather_source


class _HotWeatherSource:
    async def get_current_weather(self, city: str) -> WeatherReading:
        return WeatherReading(
            temperature=38,
            description="clear sky",
            humidity=25,
            wind_speed=4,
            pressure=1002,
            visibility=10,
            location=f"{city}, IN",
        )

    async def get_location_weather(self, lat: float, lon: float) -> WeatherReading:
        return await self.get_current_weather("Somewhere")

    async def get_forecast(self, city: str) -> List[ForecastDay]:
        return []


@pytest.fixture
def hot_weather():
    app.dependency_overrides[get_weather_source] = _HotWeatherSource
    yield
    app.dependency_overrides.pop(get_weather_source, None)


# -- Root / chat -------------------------------------------------------------


def test_root(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Kisan Saathi" in resp.json()["message"]


def test_chat_round_trip(client) -> None:
    resp = client.post("/chats/")
    assert resp.status_code == 201
    chat = resp.json()
    assert chat["messages"][0]["id"] == "welcome"

    resp = client.post(f"/chats/{chat['id']}/messages", json={"text": "Onion market price?"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["intent"] == "market_price"
    assert body["user_message"]["role"] == "user"
    assert "APMCs" in body["bot_message"]["content"]

    resp = client.get(f"/chats/{chat['id']}/messages")
    assert [m["role"] for m in resp.json()] == ["bot", "user", "bot"]


def test_blank_chat_message_is_400(client) -> None:
    chat_id = client.post("/chats/").json()["id"]
    resp = client.post(f"/chats/{chat_id}/messages", json={"text": "  "})
    assert resp.status_code == 400


def test_unknown_chat_is_404(client) -> None:
    assert client.get("/chats/nope").status_code == 404
    assert client.post("/chats/nope/messages", json={"text": "hi"}).status_code == 404


def test_delete_chat(client) -> None:
    chat_id = client.post("/chats/").json()["id"]
    assert client.delete(f"/chats/{chat_id}").status_code == 204
    assert client.get(f"/chats/{chat_id}").status_code == 404


def test_quick_actions(client) -> None:
    resp = client.get("/chats/quick-actions")
    assert [a["id"] for a in resp.json()] == ["weather", "crops", "prices", "soil"]


# -- Weather -----------------------------------------------------------------


def test_current_weather_with_mock_source(client) -> None:
    resp = client.get("/weather/current", params={"city": "Pune"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["weather"]["location"] == "Pune"
    assert body["glyph"] == "⛅"
    assert len(body["tips"]) == 1
    assert body["tips"][0]["line"].startswith("🌱 ")


def test_current_weather_tips(client, hot_weather) -> None:
    body = client.get("/weather/current", params={"city": "Akola"}).json()
    assert body["weather"]["location"] == "Akola, IN"
    assert body["glyph"] == "☀️"
    assert [t["icon"] for t in body["tips"]] == ["🌡️", "💧", "🏜️"]


def test_weather_by_coordinates(client) -> None:
    resp = client.get("/weather/coordinates", params={"lat": 18.5, "lon": 73.8})
    assert resp.status_code == 200
    assert resp.json()["weather"]["location"] == "Your Location"


def test_weather_by_coordinates_requires_lat_lon(client) -> None:
    assert client.get("/weather/coordinates").status_code == 422


def test_forecast(client) -> None:
    body = client.get("/weather/forecast", params={"city": "Pune"}).json()
    assert body["location"] == "Pune"
    assert len(body["days"]) == 5
    assert body["days"][0]["temperature"] == {"min": 22, "max": 30}


# -- Market ------------------------------------------------------------------


def test_market_prices_filtered(client) -> None:
    body = client.get(
        "/market/prices", params={"state": "Maharashtra", "query": "rice"}
    ).json()
    assert [p["commodity"] for p in body["prices"]] == ["Rice"]
    assert [t["icon"] for t in body["insights"]] == ["📊"]


def test_market_prices_insights(client) -> None:
    body = client.get("/market/prices").json()
    assert len(body["prices"]) == 8
    assert [t["line"].split(" ", 1)[0] for t in body["insights"]] == ["📉", "📈", "📉"]


def test_market_categories(client) -> None:
    assert len(client.get("/market/categories").json()) == 6


def test_state_markets(client) -> None:
    assert client.get("/market/states/Goa/markets").json() == ["APMC Market"]


def test_price_history(client) -> None:
    resp = client.get("/market/history/Rice", params={"days": 7})
    assert len(resp.json()) == 8
    assert client.get("/market/history/Rice", params={"days": 0}).status_code == 422


# -- WebSocket ---------------------------------------------------------------


def test_websocket_general_chat(client) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"action": "general_chat", "data": {"text": "fertilizer for rice"}})
        reply = ws.receive_json()
        assert reply["action"] == "general_chat"
        assert reply["data"]["intent"] == "fertilizer"
        chat_id = reply["data"]["chat_id"]

        ws.send_json(
            {"action": "general_chat", "data": {"chat_id": chat_id, "text": "soil"}}
        )
        reply = ws.receive_json()
        assert reply["data"]["chat_id"] == chat_id
        assert reply["data"]["intent"] == "soil_health"


def test_websocket_chat_error_envelope(client) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"action": "general_chat", "data": {"text": " "}})
        reply = ws.receive_json()
        assert reply["error"]["status_code"] == 400


def test_websocket_advice_actions(client) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"action": "weather_advice", "data": {"city": "Pune"}})
        reply = ws.receive_json()
        assert reply["data"]["tips"] == [
            "🌱 Current weather conditions are favorable for most farming activities."
        ]

        ws.send_json({"action": "market_advice", "data": {"state": "Karnataka"}})
        reply = ws.receive_json()
        assert [p["commodity"] for p in reply["data"]["prices"]] == ["Tomato"]
        assert reply["data"]["insights"][0].startswith("📉 Tomato")


def test_websocket_bad_input(client) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json")
        assert ws.receive_text() == "Invalid JSON"
        ws.send_json({"action": "dance"})
        assert ws.receive_text() == "Unknown action: dance"


@pytest.mark.parametrize(
    "message",
    [
        {"action": "weather_advice", "data": {"city": 5}},
        {"action": "market_advice", "data": {"state": ["Goa"]}},
        {"action": "general_chat", "data": {"text": 42}},
        {"action": "weather_advice", "data": "Pune"},
    ],
)
def test_websocket_invalid_data_gets_422_and_stays_open(client, message) -> None:
    with client.websocket_connect("/ws") as ws:
        ws.send_json(message)
        reply = ws.receive_json()
        assert reply["action"] == message["action"]
        assert reply["error"]["status_code"] == 422

        ws.send_json({"action": "weather_advice", "data": {"city": "Pune"}})
        assert ws.receive_json()["data"]["weather"]["location"] == "Pune"
