#!/usr/bin/env python3
"""Fill the database with sample users, channels, videos and comments.

Existing rows in every table are deleted first.

Usage:
    python scripts/seed_data.py [--create-tables]

Options:
    --create-tables   Create missing tables before seeding (instead of running Alembic)
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from src.auth.security import hash_password
from src.db.database import async_session_maker, engine, init_db
from src.models import Category, Channel, Comment, User, Video, VideoReaction

SAMPLE_PASSWORD = "password123"
SAMPLE_VIDEO_BASE = "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample"

SAMPLE_USERS = [
    ("JohnDoe", "john@example.com", "https://picsum.photos/100/100?random=10"),
    ("JaneSmith", "jane@example.com", "https://picsum.photos/100/100?random=11"),
    ("TechGuru", "tech@example.com", "https://picsum.photos/100/100?random=12"),
]

# One channel per sample user, in the same order
SAMPLE_CHANNELS = [
    (
        "Code with John",
        "Coding tutorials and tech reviews by John Doe.",
        "https://picsum.photos/1200/200?random=20",
        Category.TECHNOLOGY,
    ),
    (
        "Jane's Kitchen",
        "Delicious recipes and cooking tips from Jane Smith.",
        "https://picsum.photos/1200/200?random=21",
        Category.FOOD,
    ),
    (
        "Tech Insights",
        "Latest technology trends and gadget reviews.",
        "https://picsum.photos/1200/200?random=22",
        Category.TECHNOLOGY,
    ),
]

SAMPLE_VIDEOS = [
    (
        "Learn React in 30 Minutes",
        "A quick tutorial to get started with React.",
        "BigBuckBunny.mp4",
        Category.TECHNOLOGY,
        ["react", "javascript", "tutorial"],
        "09:56",
    ),
    (
        "Easy Pasta Recipe",
        "Learn to make delicious pasta in just 20 minutes.",
        "ElephantsDream.mp4",
        Category.FOOD,
        ["cooking", "pasta", "recipe"],
        "11:01",
    ),
    (
        "JavaScript Fundamentals",
        "Complete guide to JavaScript basics for beginners.",
        "ForBiggerBlazes.mp4",
        Category.EDUCATION,
        ["javascript", "programming", "tutorial"],
        "15:00",
    ),
    (
        "Gaming Setup Tour",
        "Check out my ultimate gaming setup and equipment.",
        "ForBiggerEscapes.mp4",
        Category.GAMING,
        ["gaming", "setup", "equipment"],
        "15:00",
    ),
    (
        "Morning Workout Routine",
        "Start your day with this energizing workout.",
        "ForBiggerFun.mp4",
        Category.FITNESS,
        ["workout", "fitness", "morning"],
        "15:00",
    ),
    (
        "Travel Vlog - Paris",
        "Exploring the beautiful city of Paris.",
        "ForBiggerJoyrides.mp4",
        Category.TRAVEL,
        ["travel", "paris", "vlog"],
        "15:00",
    ),
]

SAMPLE_COMMENTS = [
    "Great video! Very helpful tutorial.",
    "Thanks for sharing this! I learned a lot.",
    "This is exactly what I was looking for.",
    "Could you make more videos like this?",
    "I've been trying to learn this for weeks!",
]


async def seed(create_tables: bool = False) -> None:
    if create_tables:
        await init_db()

    async with async_session_maker() as db:
        # Children first so foreign keys never dangle
        for model in (Comment, VideoReaction, Video, Channel, User):
            await db.execute(delete(model))
        print("Cleared existing data")

        password_hash = hash_password(SAMPLE_PASSWORD)
        users = []
        for username, email, avatar in SAMPLE_USERS:
            user = User(username=username, email=email, password_hash=password_hash, avatar=avatar)
            db.add(user)
            users.append(user)
        await db.flush()
        print(f"Created {len(users)} users (password: {SAMPLE_PASSWORD})")

        channels = []
        for owner, (name, description, banner, category) in zip(users, SAMPLE_CHANNELS):
            channel = Channel(
                owner_id=owner.id,
                channel_name=name,
                description=description,
                channel_banner=banner,
                category=category,
            )
            db.add(channel)
            channels.append(channel)
        await db.flush()
        print(f"Created {len(channels)} channels")

        videos = []
        for i, (title, description, filename, category, tags, duration) in enumerate(SAMPLE_VIDEOS):
            # Round-robin over channels, uploaded by the channel owner
            channel = channels[i % len(channels)]
            video = Video(
                channel_id=channel.id,
                uploader_id=channel.owner_id,
                title=title,
                description=description,
                video_url=f"{SAMPLE_VIDEO_BASE}/{filename}",
                thumbnail_url=f"https://picsum.photos/640/360?random={30 + i}",
                category=category,
                tags=tags,
                duration=duration,
                views=random.randint(1000, 10999),
                likes=random.randint(50, 549),
                dislikes=random.randint(5, 54),
            )
            db.add(video)
            videos.append(video)
        await db.flush()
        print(f"Created {len(videos)} videos")

        for i, text in enumerate(SAMPLE_COMMENTS):
            db.add(
                Comment(
                    video_id=videos[i % len(videos)].id,
                    user_id=users[i % len(users)].id,
                    text=text,
                )
            )
        await db.commit()
        print(f"Created {len(SAMPLE_COMMENTS)} comments")

    await engine.dispose()
    print("Database seeded successfully!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the database with sample data")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = parser.parse_args()

    asyncio.run(seed(create_tables=args.create_tables))
