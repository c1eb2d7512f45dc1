from abc import ABC, abstractmethod
from typing import Optional, Set
import logging
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from models.database import RaceMarker
from models.errors import StoreError

logger = logging.getLogger(__name__)

RACE_ID_ATTRIBUTE = "raceId"


class RaceMarkerRepository(ABC):
    @abstractmethod
    async def exists(self, race_id: str) -> bool:
        """Return True if a marker for race_id is already stored.

        "Not found" is a normal False; any other failure raises StoreError.
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, race_id: str) -> bool:
        """Insert a marker only if none exists for race_id.

        Returns:
            True if the marker was inserted, False if one was already there.
        """
        pass


class RaceMarkerRepositoryDynamo(RaceMarkerRepository):
    """DynamoDB-backed marker table, hash key `raceId`."""

    def __init__(
        self,
        table_name: str,
        region_name: str,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None
    ):
        self.table_name = table_name

        self.dynamodb_client = boto3.client(
            'dynamodb',
            endpoint_url=endpoint_url,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region_name
        )

    def _key(self, race_id: str) -> dict:
        return {RACE_ID_ATTRIBUTE: {"S": race_id}}

    async def exists(self, race_id: str) -> bool:
        try:
            response = self.dynamodb_client.get_item(
                TableName=self.table_name,
                Key=self._key(race_id),
                ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"error looking up race {race_id} in {self.table_name}: {e}") from e

        return "Item" in response

    async def insert_if_absent(self, race_id: str) -> bool:
        try:
            self.dynamodb_client.put_item(
                TableName=self.table_name,
                Item=self._key(race_id),
                ConditionExpression="attribute_not_exists(#race_id)",
                ExpressionAttributeNames={"#race_id": RACE_ID_ATTRIBUTE}
            )
        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                return False
            raise StoreError(f"error putting race {race_id} in {self.table_name}: {e}") from e
        except BotoCoreError as e:
            raise StoreError(f"error putting race {race_id} in {self.table_name}: {e}") from e

        logger.info(f"[Registrar] DynamoDB put result {race_id}")
        return True


class RaceMarkerRepositoryDB(RaceMarkerRepository):
    """SQLAlchemy-based marker table for PostgreSQL."""

    def __init__(self, db: Session):
        self.db = db

    async def exists(self, race_id: str) -> bool:
        try:
            return self.db.get(RaceMarker, race_id) is not None
        except SQLAlchemyError as e:
            raise StoreError(f"error looking up race {race_id}: {e}") from e

    async def insert_if_absent(self, race_id: str) -> bool:
        try:
            self.db.execute(insert(RaceMarker).values(race_id=race_id))
            self.db.commit()
        except IntegrityError:
            # Primary key already taken by a concurrent upload
            self.db.rollback()
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"error inserting race {race_id}: {e}") from e
        return True


class RaceMarkerRepositoryMock(RaceMarkerRepository):
    """In-memory marker set for tests."""

    def __init__(self):
        self.race_ids: Set[str] = set()
        self.inserts = 0

    async def exists(self, race_id: str) -> bool:
        return race_id in self.race_ids

    async def insert_if_absent(self, race_id: str) -> bool:
        if race_id in self.race_ids:
            return False
        self.race_ids.add(race_id)
        self.inserts += 1
        return True
