"""Demo records loaded into the in-memory stores when SEED_DEMO_DATA is on."""

from typing import List

from postboard.schemas import Post, User


def demo_users() -> List[User]:
    return [
        User(id=10137, name="Shiva", email="shiva@gmail.com", phone="423523525"),
        User(id=96951, name="Suresh", email="suresh@gmail.com", phone="354534534"),
        User(id=60512, name="Shubham", email="shub@gmail.com", phone="635456456"),
    ]


def demo_posts() -> List[Post]:
    return [
        Post(id=13311, title="Sample title", description="Sample description"),
        Post(id=24622, title="Another title", description="Another description"),
        Post(id=35933, title="Third title", description="Third description"),
        Post(id=47244, title="Fourth title", description="Fourth description"),
    ]
