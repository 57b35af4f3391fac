import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from functools import partial

# Shared by every request; parsing and page fetches are short-lived
IO_POOL = ThreadPoolExecutor(
    max_workers=int(os.getenv("IO_POOL_WORKERS", "8")),
    thread_name_prefix="faq-io",
)


def run_sync(func, *args, **kwargs):
    """
    Await a blocking call (PDF / DOCX parsing, requests.get) without
    stalling the event loop.
    """
    loop = asyncio.get_running_loop()
    return loop.run_in_executor(IO_POOL, partial(func, *args, **kwargs))
