from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum, JSON, func

from app.core.db import Base
from app.schemas.enums import ExperienceLevel


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # stored as given, never serialized
    password = Column(String, nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    title = Column(String(200), nullable=False)
    bio = Column(Text, nullable=True)

    experience_level = Column(
        Enum(ExperienceLevel, name="experience_level_enum"),
        nullable=False,
    )

    # ordered list like ["React", "TypeScript"]
    skills = Column(JSON, nullable=False, default=list)

    profile_image = Column(String, nullable=True)

    is_online = Column(Boolean, nullable=False, default=False)
    open_to_collaborate = Column(Boolean, nullable=False, default=True)
    last_seen = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
