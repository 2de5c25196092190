"""Play a round of pebbles against a running server from the terminal.

Contract
- Inputs: a server at PEBBLES_SERVER_URL (default http://127.0.0.1:8000).
- Creates the game if none exists, otherwise restarts it with the given settings.
- Prompts for a number each turn; `q` gives up.

Usage:
    uv run uvicorn pebbles.main:app
    uv run python scripts/play_cli.py --pebbles 15 --max-per-turn 3 --difficulty hard
"""

from __future__ import annotations

import argparse
import os
from typing import Any

import httpx
from dotenv import load_dotenv


def _describe(event: dict[str, Any] | None) -> str:
    if event is None:
        return "You move first."
    if event["type"] == "counter_turn":
        return f"Program takes {event['pebbles']}."
    if event["player"] == "user":
        return "You took the last pebble. You win!"
    return "Program wins."


def _start_round(client: httpx.Client, *, pebbles: int, max_per_turn: int, difficulty: str) -> dict[str, Any]:
    body = {"pebbles_count": pebbles, "max_pebbles_per_turn": max_per_turn, "difficulty": difficulty}

    resp = client.post("/game", json=body)
    if resp.status_code == 201:
        data = resp.json()
        events = data["events"]
        print(_describe(events[0] if events else None))
        return data["state"]

    if resp.status_code != 409:
        resp.raise_for_status()

    resp = client.post("/game/actions", json={"action": "restart", **body})
    resp.raise_for_status()
    data = resp.json()
    print(_describe(data["event"]))
    return data["state"]


def run(*, base_url: str, pebbles: int, max_per_turn: int, difficulty: str) -> None:
    with httpx.Client(base_url=base_url, timeout=10.0) as client:
        state = _start_round(client, pebbles=pebbles, max_per_turn=max_per_turn, difficulty=difficulty)

        while state["winner"] is None:
            print(f"Pebbles left: {state['pebbles_remaining']} (take 1..{state['max_pebbles_per_turn']})")
            raw = input("Your move (q to give up): ").strip().lower()
            if not raw:
                continue

            if raw == "q":
                body: dict[str, Any] = {"action": "give_up"}
            elif raw.isdigit():
                body = {"action": "turn", "pebbles": int(raw)}
            else:
                print("Enter a number or q.")
                continue

            resp = client.post("/game/actions", json=body)
            if resp.status_code == 422:
                print(f"Rejected: {resp.json().get('detail')}")
                continue
            resp.raise_for_status()

            data = resp.json()
            print(_describe(data["event"]))
            state = data["state"]

        print(f"Winner: {state['winner']} (round {state['round']})")


def main() -> None:
    load_dotenv(override=False)

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--pebbles", type=int, default=15)
    parser.add_argument("--max-per-turn", type=int, default=3)
    parser.add_argument("--difficulty", choices=["easy", "hard"], default="easy")
    parser.add_argument("--url", default=os.environ.get("PEBBLES_SERVER_URL", "http://127.0.0.1:8000"))
    args = parser.parse_args()

    run(base_url=args.url, pebbles=args.pebbles, max_per_turn=args.max_per_turn, difficulty=args.difficulty)


if __name__ == "__main__":
    main()
