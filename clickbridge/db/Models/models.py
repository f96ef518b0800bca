from sqlalchemy import Column, String, Integer, DateTime, Text, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class ClickItem(Base):
    __tablename__ = "clicks"

    # Surrogate row number; lookups always go through cid
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Click id: exactly 10 base62 chars. The unique constraint is what rejects
    # a second insert for the same cid.
    cid = Column(String(10), unique=True, nullable=False)
    slug = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    # Attribution
    twclid = Column(String(100), nullable=True)
    utm_source = Column(String(200), nullable=True)
    utm_medium = Column(String(200), nullable=True)
    utm_campaign = Column(String(200), nullable=True)
    utm_content = Column(String(200), nullable=True)

    # Request metadata
    user_agent = Column(Text, nullable=True)
    referer = Column(Text, nullable=True)
    ip_hash = Column(String(64), nullable=True)

    __table_args__ = (
        # time-ordered admin queries
        Index("idx_clicks_created_at", "created_at"),
    )

# Column widths shared by every store so one record fits all of them
SLUG_MAX_LENGTH = 100
TWCLID_MAX_LENGTH = 100
UTM_MAX_LENGTH = 200
