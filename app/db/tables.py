from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

# Pre-existing table; the application only issues INSERT and SELECT against it.
documents = Table(
    "documents",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("voornaam", Text, nullable=True),
    Column("familienaam", Text, nullable=True),
    Column("url", Text, nullable=False),
)
