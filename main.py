import asyncio

from timesafe.config import settings
from timesafe.models.entities import Message, Origin
from timesafe.services.session_service import ConversationSession
from timesafe.services.taxonomy import QUICK_REPLIES


def show(message: Message):
    speaker = "You" if message.origin == Origin.USER else "Bot"
    print(f"[{message.clock_time(settings.DISPLAY_TIMEZONE)}] {speaker}: {message.text}")


async def run_console_chat():
    async with ConversationSession() as session:
        # Step 1: greeting
        show(session.messages[0])
        print("Try:", " | ".join(QUICK_REPLIES))

        while True:
            # Step 2: read user text
            try:
                text = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if text.strip().lower() in {"exit", "quit"}:
                break

            # Step 3: submit and wait for the typing delay
            if await session.submit(text) is None:
                continue
            await session.wait_idle()

            # Step 4: print the reply
            show(session.messages[-1])


if __name__ == "__main__":
    asyncio.run(run_console_chat())
