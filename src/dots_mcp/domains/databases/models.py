"""Pydantic models for managed database request payloads."""

from enum import Enum

from pydantic import BaseModel, Field


class DatabaseEngine(str, Enum):
    """Database engines offered by the managed database service."""

    POSTGRESQL = "pg"
    MYSQL = "mysql"
    REDIS = "redis"
    MONGODB = "mongodb"
    VALKEY = "valkey"
    KAFKA = "kafka"
    OPENSEARCH = "opensearch"


class PoolMode(str, Enum):
    """PgBouncer pooling modes."""

    SESSION = "session"
    TRANSACTION = "transaction"
    STATEMENT = "statement"


class DatabaseCreateClusterRequest(BaseModel):
    """Request model for creating a database cluster."""

    name: str = Field(..., description="Unique, human-readable cluster name")
    engine: DatabaseEngine = Field(..., description="Database engine")
    version: str | None = Field(None, description="Engine version (latest if omitted)")
    size: str = Field(..., description="Node size slug (e.g., 'db-s-1vcpu-1gb')")
    region: str = Field(..., description="Region slug (e.g., 'nyc1')")
    num_nodes: int = Field(1, ge=1, le=3, description="Number of nodes in the cluster")
    tags: list[str] | None = Field(None, description="Tags to apply to the cluster")
    private_network_uuid: str | None = Field(None, description="VPC to place the cluster in")


class DatabaseResizeClusterRequest(BaseModel):
    """Request model for resizing a database cluster."""

    size: str = Field(..., description="New node size slug")
    num_nodes: int = Field(..., ge=1, le=3, description="New number of nodes")


class AddPoolRequestOptions(BaseModel):
    """Request model for adding a connection pool to a PostgreSQL cluster."""

    name: str = Field(..., description="Pool name")
    mode: PoolMode = Field(PoolMode.TRANSACTION, description="Pooling mode")
    size: int = Field(..., ge=1, description="Number of backend connections")
    db: str = Field(..., description="Database the pool connects to")
    user: str | None = Field(None, description="User the pool connects as")
