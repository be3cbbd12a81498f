"""Backend database models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contracts.wechat import DbQuery


class DbTableSchema(BaseModel):
    """Table name with its CREATE statement."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., examples=["MSG"])
    sql: str = Field(..., description="CREATE TABLE statement")


class DbQueryRequest(BaseModel):
    """Raw SQL against one backend database.

    Rows come back as objects keyed by column name. Values are bare JSON
    scalars: integers and floats as numbers, text as strings, blobs as
    base64 strings, and null when a value cannot be represented.

    Example:
        ```json
        {"db": "MicroMsg.db", "sql": "SELECT UserName, Remark FROM Contact LIMIT 10"}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "db": "MicroMsg.db",
                "sql": "SELECT UserName, Remark FROM Contact LIMIT 10",
            }
        }
    )

    db: str = Field(..., min_length=1, description="Database name from GET /dbs")
    sql: str = Field(..., min_length=1, description="SQL statement")

    def to_contract(self) -> DbQuery:
        return DbQuery(db=self.db, sql=self.sql)
