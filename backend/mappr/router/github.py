"""
GitHub Router
Star count for the landing page badge
"""

import httpx
from fastapi import APIRouter

from mappr.core import config

router = APIRouter(prefix="/api/github", tags=["GitHub"])


@router.get("/stars")
async def github_stars():
    """
    Repository star count. Purely decorative, so any failure reports 0.
    """
    url = f"{config.GITHUB_API_URL.rstrip('/')}/repos/{config.GITHUB_REPOSITORY}"
    try:
        async with httpx.AsyncClient(timeout=config.UPSTREAM_TIMEOUT_SECONDS) as client:
            response = await client.get(url, headers={"Accept": "application/vnd.github.v3+json"})

        if response.status_code != 200:
            print(f"[github] Failed to fetch repository data: HTTP {response.status_code}")
            return {"stars": 0}

        stars = response.json().get("stargazers_count") or 0
        return {"stars": int(stars)}
    except Exception as e:
        print(f"[github] Error fetching GitHub stars: {e}")
        return {"stars": 0}
