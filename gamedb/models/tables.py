"""SQLAlchemy Core table definitions"""
from sqlalchemy import Column, Float, Integer, MetaData, String, Table

metadata = MetaData()

steamgame = Table(
    "steamgame",
    metadata,
    Column("gameid", Integer, primary_key=True, autoincrement=True),
    Column("gamename", String(255), nullable=False, default=""),
    Column("price", Float, nullable=False, default=0.0),
    Column("imageurl", String(1024), nullable=False, default=""),
)
