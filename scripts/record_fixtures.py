"""Record live API responses as test fixtures."""

import asyncio
import json
from datetime import datetime
from pathlib import Path

from mojank import HttpxFetcher, Profile, SimpleProfile
from mojank.exceptions import FetchError

# Test accounts
USERNAMES = [
    "Notch",
    "senseiwells",
]

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


async def record_account(fetcher: HttpxFetcher, username: str, save_fixture: bool = True) -> dict:
    """Fetch and validate a single account."""
    print(f"\n{'='*60}")
    print(f"Looking up {username}...")
    print(f"{'='*60}")

    start = datetime.now()

    try:
        simple = await fetcher.get_simple_profile(username)
        if simple.status_code != 200 or not simple.is_json:
            print(f"❌ Name lookup failed: HTTP {simple.status_code}")
            return {"username": username, "success": False}
        uuid = simple.decode(SimpleProfile).id

        full = await fetcher.get_full_profile(uuid)
        if full.status_code != 200 or not full.is_json:
            print(f"❌ Profile lookup failed: HTTP {full.status_code}")
            return {"username": username, "success": False}
    except FetchError as e:
        print(f"❌ Fetch exception: {e}")
        return {"username": username, "success": False, "error": str(e)}

    duration_ms = (datetime.now() - start).total_seconds() * 1000
    print(f"✓ Fetched in {duration_ms:.0f}ms ({len(full.content)} bytes)")

    profile = full.decode(Profile)
    skin = profile.get_skin()
    print(f"  UUID: {profile.id}")
    print(f"  Skin: {skin.textures.skin.url} ({skin.textures.skin.metadata.model})")
    print(f"  Cape: {skin.textures.cape.url if skin.textures.cape else '-'}")

    if save_fixture:
        FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
        name = username.lower()
        (FIXTURES_DIR / f"{name}_simple.json").write_bytes(simple.content)
        fixture_path = FIXTURES_DIR / f"{name}_profile.json"
        fixture_path.write_text(json.dumps(json.loads(full.content), indent=2), encoding="utf-8")
        print(f"✓ Saved fixture: {fixture_path}")

    return {
        "username": username,
        "success": True,
        "has_cape": skin.textures.cape is not None,
        "duration_ms": duration_ms,
    }


async def main():
    """Record fixtures for all test accounts."""
    print(f"Recording {len(USERNAMES)} accounts: {', '.join(USERNAMES)}")

    results = []
    async with HttpxFetcher() as fetcher:
        for username in USERNAMES:
            results.append(await record_account(fetcher, username))
            # Stay clear of the rate limit
            await asyncio.sleep(1)

    print("\n| Username    | OK  | Cape | Duration |")
    print("|-------------|-----|------|----------|")
    for r in results:
        ok = "✓" if r.get("success") else "❌"
        cape = "✓" if r.get("has_cape") else "-"
        duration = f"{r.get('duration_ms', 0):.0f}ms"
        print(f"| {r['username']:<11} | {ok:<3} | {cape:<4} | {duration:<8} |")


if __name__ == "__main__":
    asyncio.run(main())
