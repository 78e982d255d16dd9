import anyio

from dagette import task, run, trace, show_dag_tree


async def fetch_user(h):
    await anyio.sleep(0.05)
    return h.ok({"id": 7, "name": "ada"})


async def fetch_streams(h, user):
    await anyio.sleep(0.05)
    return h.ok([f"{user['name']}-live", f"{user['name']}-vod"])


async def fetch_friends(h, user):
    await anyio.sleep(0.05)
    return h.ok(["grace", "alan"])


user = task("fetch-user", [], fetch_user)
streams = task("fetch-streams", [user], fetch_streams)
friends = task("fetch-friends", [user], fetch_friends)
page = task("page", [streams, friends], lambda h, s, f: h.ok({"streams": s, "friends": f}))

print(trace(page))
result = anyio.run(run, page)
print(result.unwrap())
show_dag_tree(page)
