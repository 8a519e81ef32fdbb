#!/usr/bin/env python3
"""
Storefront Session Example

Types queries at a running assistant server and drives the listing state and
the avatar sequencer the way the storefront page does, printing each avatar
clip change and playing the spoken responses.

Requirements:
    pip install storefront-assistant
    storefront-assistant serve  # in another terminal

Usage:
    python storefront_session.py [http://localhost:3000]
"""

import asyncio
import sys

from storefront_assistant.client import (
    AssistantClient,
    ReactionSequencer,
    ResultArrived,
    StorefrontViewState,
    SubprocessAudioPlayer,
)


async def session(base_url: str) -> None:
    client = AssistantClient(base_url=base_url)
    if not client.is_connected():
        print(f"No assistant server at {base_url}")
        return

    view = StorefrontViewState()
    sequencer = ReactionSequencer(SubprocessAudioPlayer())
    sequencer.add_listener(lambda visual: print(f"  [avatar] {visual.animation.asset}"))

    print("Ask the shop assistant something (empty line to quit).")
    try:
        while True:
            query = await asyncio.to_thread(input, "> ")
            if not query.strip():
                break

            result = await asyncio.to_thread(client.query, query)
            print(f"  {result.response_text}")
            print(f"  {view.apply(result)}")

            # A new query preempts whatever the avatar is still doing
            sequencer.dispatch(ResultArrived(result))
    finally:
        sequencer.close()
        client.close()


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"
    asyncio.run(session(base_url))


if __name__ == "__main__":
    main()
