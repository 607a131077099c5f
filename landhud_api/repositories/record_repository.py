"""
Record Repository for DynamoDB operations.
Handles CRUD operations for lead list import records.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional
import boto3
from botocore.exceptions import ClientError
from landhud_api.core import config
from landhud_api.core.exceptions import PersistenceError
from landhud_api.models.import_record import ImportRecord


class RecordRepository:
    """Repository for import record DynamoDB operations."""

    def __init__(self):
        self.dynamodb = boto3.resource('dynamodb', region_name=config.settings.aws_region)
        self.table = self.dynamodb.Table(config.settings.records_table_name)

    def create(self, record: ImportRecord) -> ImportRecord:
        """
        Create a new import record.

        Assigns the record id and timestamps before writing.

        Args:
            record: ImportRecord domain model without an id

        Returns:
            The stored ImportRecord

        Raises:
            PersistenceError: If create operation fails
        """
        now = datetime.now(timezone.utc)
        record.id = self._generate_id()
        record.created_at = now
        record.updated_at = now
        record.date_imported = record.date_imported or now

        try:
            self.table.put_item(
                Item=self._record_to_item(record),
                ConditionExpression='attribute_not_exists(#id)',
                ExpressionAttributeNames={'#id': 'id'}
            )
        except ClientError as e:
            raise PersistenceError(f"Failed to create record: {str(e)}") from e
        except Exception as e:
            raise PersistenceError(f"Unexpected error creating record: {str(e)}") from e

        return record

    def get_by_id(self, record_id: str) -> Optional[ImportRecord]:
        """
        Retrieve an import record by ID.

        Args:
            record_id: Record identifier

        Returns:
            ImportRecord or None if not found

        Raises:
            PersistenceError: If query fails
        """
        try:
            response = self.table.get_item(Key={'id': record_id}, ConsistentRead=True)
        except ClientError as e:
            raise PersistenceError(f"Failed to get record: {str(e)}") from e
        except Exception as e:
            raise PersistenceError(f"Unexpected error getting record: {str(e)}") from e

        if 'Item' not in response:
            return None

        return self._item_to_record(response['Item'])

    def update(
        self,
        record_id: str,
        updates: dict,
        expected_status: Optional[str] = None
    ) -> Optional[ImportRecord]:
        """
        Update fields of an existing import record.

        Fields set to None are removed from the item. Never creates an item.

        Args:
            record_id: Record identifier
            updates: Dictionary of fields to update
            expected_status: When given, the write only applies while the
                stored status still equals this value

        Returns:
            The updated ImportRecord, or None if the record does not exist
            or no longer has the expected status

        Raises:
            PersistenceError: If update operation fails
        """
        updates = dict(updates)
        updates['updated_at'] = datetime.now(timezone.utc).isoformat()

        set_parts = []
        remove_parts = []
        expression_names = {'#id': 'id'}
        expression_values = {}

        for key, value in updates.items():
            expression_names[f"#{key}"] = key
            if value is None:
                remove_parts.append(f"#{key}")
            else:
                set_parts.append(f"#{key} = :{key}")
                expression_values[f":{key}"] = value

        update_expression = "SET " + ", ".join(set_parts)
        if remove_parts:
            update_expression += " REMOVE " + ", ".join(remove_parts)

        condition_expression = 'attribute_exists(#id)'
        if expected_status is not None:
            expression_names['#status'] = 'status'
            expression_values[':expected_status'] = expected_status
            condition_expression += ' AND #status = :expected_status'

        try:
            response = self.table.update_item(
                Key={'id': record_id},
                UpdateExpression=update_expression,
                ConditionExpression=condition_expression,
                ExpressionAttributeNames=expression_names,
                ExpressionAttributeValues=expression_values,
                ReturnValues='ALL_NEW'
            )
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                return None
            raise PersistenceError(f"Failed to update record: {str(e)}") from e
        except Exception as e:
            raise PersistenceError(f"Unexpected error updating record: {str(e)}") from e

        return self._item_to_record(response['Attributes'])

    def delete(self, record_id: str) -> None:
        """
        Delete an import record.

        Args:
            record_id: Record identifier

        Raises:
            PersistenceError: If delete operation fails
        """
        try:
            self.table.delete_item(Key={'id': record_id})
        except ClientError as e:
            raise PersistenceError(f"Failed to delete record: {str(e)}") from e
        except Exception as e:
            raise PersistenceError(f"Unexpected error deleting record: {str(e)}") from e

    def list_all(self) -> List[ImportRecord]:
        """
        Retrieve all import records, newest first.

        Raises:
            PersistenceError: If scan fails
        """
        try:
            response = self.table.scan()
            items = response.get('Items', [])
            while 'LastEvaluatedKey' in response:
                response = self.table.scan(ExclusiveStartKey=response['LastEvaluatedKey'])
                items.extend(response.get('Items', []))
        except ClientError as e:
            raise PersistenceError(f"Failed to list records: {str(e)}") from e
        except Exception as e:
            raise PersistenceError(f"Unexpected error listing records: {str(e)}") from e

        records = [self._item_to_record(item) for item in items]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def _generate_id(self) -> str:
        return str(uuid.uuid4())

    def _record_to_item(self, record: ImportRecord) -> dict:
        """Convert ImportRecord domain model to DynamoDB item."""
        item = {
            'id': record.id,
            'name': record.name,
            'county': record.county,
            'state': record.state,
            'status': record.status.value,
            'source_file_url': record.source_file_url,
            'date_imported': record.date_imported.isoformat(),
            'created_at': record.created_at.isoformat(),
            'updated_at': record.updated_at.isoformat()
        }

        optional_fields = {
            'file_url': record.file_url,
            'record_count': record.record_count,
            'error_message': record.error_message,
            'notes': record.notes
        }
        item.update({key: value for key, value in optional_fields.items() if value is not None})

        return item

    def _item_to_record(self, item: dict) -> ImportRecord:
        """Convert DynamoDB item to ImportRecord domain model."""
        record_count = item.get('record_count')
        date_imported = item.get('date_imported')
        return ImportRecord(
            id=item['id'],
            name=item['name'],
            county=item['county'],
            state=item['state'],
            status=item['status'],
            source_file_url=item['source_file_url'],
            file_url=item.get('file_url'),
            record_count=int(record_count) if record_count is not None else None,
            error_message=item.get('error_message'),
            notes=item.get('notes'),
            date_imported=datetime.fromisoformat(date_imported) if date_imported else None,
            created_at=datetime.fromisoformat(item['created_at']),
            updated_at=datetime.fromisoformat(item['updated_at'])
        )
