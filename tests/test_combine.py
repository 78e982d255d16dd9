from time import perf_counter

import anyio

from dagette import Err, Executor, Ok, all_of, run, task


def _delayed(seconds, value=None, error=None):
    async def fn(h):
        await anyio.sleep(seconds)
        return h.err(error) if error is not None else h.ok(value)

    return fn


def test_all_of_returns_tuple_in_input_order():
    profile = task("profile", [], _delayed(0.03, "p"))
    settings = task("settings", [], _delayed(0.0, "s"))
    prefs = task("prefs", [], _delayed(0.01, "x"))
    combined = all_of("user-data", [profile, settings, prefs])
    assert combined.deps == (profile, settings, prefs)
    assert anyio.run(run, combined) == Ok(("p", "s", "x"))


def test_all_of_runs_in_parallel():
    tasks = [task(f"t{i}", [], _delayed(0.05, i)) for i in range(5)]
    start = perf_counter()
    assert anyio.run(run, all_of("all", tasks)) == Ok((0, 1, 2, 3, 4))
    assert perf_counter() - start < 0.2


def test_all_of_fails_fast_with_origin():
    bad = task("bad", [], _delayed(0.01, error="nope"))
    slow = task("slow", [], _delayed(0.2, "ok"))
    combined = all_of("both", [slow, bad])

    async def main():
        async with Executor() as ex:
            start = perf_counter()
            r = await ex.execute(combined)
            return r, perf_counter() - start

    r, elapsed = anyio.run(main)
    assert r == Err("nope", bad)
    assert elapsed < 0.1


def test_all_of_empty():
    assert anyio.run(run, all_of("nothing", [])) == Ok(())


def test_all_of_is_usable_as_dependency():
    a = task("a", [], _delayed(0.0, 2))
    b = task("b", [], _delayed(0.0, 3))
    both = all_of("both", [a, b])
    product = task("product", [both], lambda h, pair: h.ok(pair[0] * pair[1]))
    assert anyio.run(run, product) == Ok(6)
