"""Unit tests for the blog post and share repositories."""

from __future__ import annotations

import pytest_asyncio

from talanta_gallery.core.database.entities import BlogPost, BlogShare


@pytest_asyncio.fixture
async def posts(repos):
    published = await repos.blog_posts.create(BlogPost(title="Studio Visit", content="...", published=True))
    draft = await repos.blog_posts.create(BlogPost(title="Work in Progress", content="..."))
    return published, draft


class TestBlogPostRepository:
    async def test_published_only_by_default(self, repos, posts):
        assert [p.title for p in await repos.blog_posts.list_posts()] == ["Studio Visit"]

    async def test_all_posts(self, repos, posts):
        assert {p.title for p in await repos.blog_posts.list_posts(published_only=False)} == {
            "Studio Visit",
            "Work in Progress",
        }


class TestBlogShareRepository:
    async def test_shares_with_titles_and_counts(self, repos, posts):
        published, _ = posts
        for platform in ("facebook", "twitter", "twitter"):
            await repos.blog_shares.create(BlogShare(blog_post_id=published.id, platform=platform))

        shares = await repos.blog_shares.list_with_posts(limit=2)

        assert len(shares) == 2
        assert {title for _, title in shares} == {"Studio Visit"}
        assert await repos.blog_shares.counts_by_platform() == {"facebook": 1, "twitter": 2}

    async def test_no_shares(self, repos):
        assert await repos.blog_shares.counts_by_platform() == {}
        assert await repos.blog_shares.list_with_posts() == []
