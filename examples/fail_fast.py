from time import perf_counter

import anyio

from dagette import Executor, all_of, task
from dagette.utils.logging import enable_rich_logging

enable_rich_logging("debug")


async def quota(h):
    await anyio.sleep(0.01)
    return h.err("quota exceeded")


async def report(h):
    await anyio.sleep(1.0)
    return h.ok("report.pdf")


combined = all_of("dashboard", [task("report", [], report), task("quota", [], quota)])


async def main():
    async with Executor() as ex:
        start = perf_counter()
        result = await ex.execute(combined)
        print(f"{result!r} after {perf_counter() - start:.3f}s")
    # leaving the block waited for 'report' to finish in the background


anyio.run(main)
