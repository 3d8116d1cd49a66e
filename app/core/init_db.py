from datetime import datetime, timedelta, timezone

from loguru import logger
from sqlalchemy.orm import Session

from app.core.config import SEED_SAMPLE_DATA
from app.core.db import engine, Base, SessionLocal

# Import all models so SQLAlchemy registers them
from app.models.user import User
from app.modules.connections.models import Connection
from app.modules.messages.models import Message
from app.schemas.enums import ConnectionState, ExperienceLevel


SAMPLE_USERS = [
    {
        "username": "Dakshata_Borse",
        "email": "dakshata@example.com",
        "password": "password123",
        "first_name": "Dakshata",
        "last_name": "Borse",
        "title": "Full-Stack Developer",
        "bio": "Building scalable web apps with React and Node.js. Mentoring junior developers on open-source projects.",
        "experience_level": ExperienceLevel.intermediate,
        "skills": ["React", "TypeScript", "Node.js", "PostgreSQL"],
        "is_online": True,
        "open_to_collaborate": True,
    },
    {
        "username": "Meghana_khotare",
        "email": "meghana@example.com",
        "password": "password123",
        "first_name": "Meghana",
        "last_name": "Khotare",
        "title": "Backend Engineer",
        "bio": "Python, Django and cloud architecture. Enjoys API design and database tuning.",
        "experience_level": ExperienceLevel.intermediate,
        "skills": ["Python", "Django", "AWS", "Docker"],
        "is_online": False,
        "open_to_collaborate": True,
    },
    {
        "username": "Visishta",
        "email": "visishta@example.com",
        "password": "password123",
        "first_name": "Visishta",
        "last_name": "B",
        "title": "Frontend Developer",
        "bio": "Learning React and JavaScript, looking for beginner-friendly projects.",
        "experience_level": ExperienceLevel.beginner,
        "skills": ["JavaScript", "React", "HTML/CSS", "Git"],
        "is_online": False,
        "open_to_collaborate": True,
    },
    {
        "username": "Komal",
        "email": "komal@example.com",
        "password": "password123",
        "first_name": "Komal",
        "last_name": "S",
        "title": "DevOps Engineer",
        "bio": "Kubernetes, CI/CD and cloud platforms. Automates everything.",
        "experience_level": ExperienceLevel.professional,
        "skills": ["Kubernetes", "Docker", "Jenkins", "Terraform"],
        "is_online": True,
        "open_to_collaborate": False,
    },
]


def seed_sample_data(db: Session) -> bool:
    """Insert demo users, connections and messages into an empty database.

    Returns False when users already exist.
    """
    if db.query(User.id).first() is not None:
        logger.info("Database already has data, skipping sample data")
        return False

    now = datetime.now(timezone.utc)
    users = [User(**data, last_seen=now) for data in SAMPLE_USERS]
    db.add_all(users)
    db.flush()

    dakshata, meghana, visishta, _ = users
    db.add_all([
        Connection(
            requester_id=dakshata.id,
            receiver_id=meghana.id,
            status=ConnectionState.accepted,
        ),
        Connection(
            requester_id=dakshata.id,
            receiver_id=visishta.id,
            status=ConnectionState.pending,
            message="Happy to help with your React projects!",
        ),
    ])

    db.add_all([
        Message(
            sender_id=dakshata.id,
            receiver_id=meghana.id,
            content="Hey Meghana, how's your Django project going?",
            created_at=now - timedelta(minutes=1),
        ),
        Message(
            sender_id=meghana.id,
            receiver_id=dakshata.id,
            content="Going well, just finished optimizing a few queries.",
            created_at=now,
        ),
    ])
    db.commit()

    logger.info(f"Sample data created | users={len(users)}")
    return True


def init_db():
    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    if SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()
