"""HTTP benchmark for the articles API.

Creates one article per iteration, then reads it back, and reports
client-side latency next to the server's own X-Response-Time-Ms.
"""
import argparse
import asyncio
import statistics
import time

import httpx

DEFAULT_BASE_URL = "http://localhost:8080"


def _summarise(name: str, times: list[float], server_times: list[float], errors: int) -> dict:
    if not times:
        return {"name": name, "error": f"All {errors} requests failed"}
    ordered = sorted(times)
    return {
        "name": name,
        "avg_ms": round(statistics.mean(times), 2),
        "p50_ms": round(ordered[len(ordered) // 2], 2),
        "p95_ms": round(ordered[int(len(ordered) * 0.95)], 2),
        "server_ms": round(statistics.mean(server_times), 2) if server_times else "N/A",
        "errors": errors,
    }


async def _timed(client: httpx.AsyncClient, method: str, url: str, **kwargs):
    start = time.perf_counter()
    resp = await client.request(method, url, **kwargs)
    elapsed = (time.perf_counter() - start) * 1000
    server = resp.headers.get("x-response-time-ms")
    return resp, elapsed, float(server) if server else None


async def benchmark(client: httpx.AsyncClient, base_url: str, iterations: int) -> list[dict]:
    samples: dict[str, tuple[list[float], list[float]]] = {
        "POST /api/v1/articles": ([], []),
        "GET /api/v1/articles/{id}": ([], []),
    }
    errors = {name: 0 for name in samples}

    for i in range(iterations):
        name = "POST /api/v1/articles"
        resp, elapsed, server = await _timed(
            client, "POST", f"{base_url}/api/v1/articles", json={"title": f"Benchmark {i}"}
        )
        if resp.status_code != 201:
            errors[name] += 1
            continue
        samples[name][0].append(elapsed)
        if server is not None:
            samples[name][1].append(server)

        name = "GET /api/v1/articles/{id}"
        article_id = resp.json()["id"]
        resp, elapsed, server = await _timed(client, "GET", f"{base_url}/api/v1/articles/{article_id}")
        if resp.status_code != 200:
            errors[name] += 1
            continue
        samples[name][0].append(elapsed)
        if server is not None:
            samples[name][1].append(server)

    return [_summarise(name, t, s, errors[name]) for name, (t, s) in samples.items()]


async def run_benchmark(base_url: str, iterations: int) -> None:
    print("=" * 72)
    print(f"Articles API Benchmark: {iterations} iterations")
    print(f"Target: {base_url}")
    print("=" * 72)

    async with httpx.AsyncClient() as client:
        try:
            resp = await client.get(f"{base_url}/health")
        except httpx.HTTPError as e:
            print(f"ERROR: Cannot connect to {base_url}: {e}")
            return
        if resp.status_code != 200:
            print(f"ERROR: Health check failed ({resp.status_code})")
            return
        print(f"Health: {resp.json()}")

        results = await benchmark(client, base_url, iterations)

    print()
    print(f"{'Endpoint':<30} {'Avg':>9} {'P50':>9} {'P95':>9} {'Server':>9} {'Err':>4}")
    print("-" * 72)
    for result in results:
        if "error" in result:
            print(f"{result['name']:<30} {'ERROR':>9}")
            continue
        print(
            f"{result['name']:<30} "
            f"{result['avg_ms']:>7.1f}ms "
            f"{result['p50_ms']:>7.1f}ms "
            f"{result['p95_ms']:>7.1f}ms "
            f"{str(result['server_ms']):>9} "
            f"{result['errors']:>4}"
        )
    print("-" * 72)


def main():
    parser = argparse.ArgumentParser(description="Benchmark the articles API")
    parser.add_argument("-n", "--iterations", type=int, default=50, help="Create/read pairs to run")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    args = parser.parse_args()
    asyncio.run(run_benchmark(args.base_url, args.iterations))


if __name__ == "__main__":
    main()
