"""
Record Service
Prepares submitted records before the collection store persists them.

Handles:
- Rentals: entity lookup, machineryId/vehicleId, pricing and default statuses
- Users: default role permissions when none are submitted
"""

from typing import Any, Dict

from maquirent.buisness.core.collection_store import CollectionStore
from maquirent.buisness.core.permissions import default_permissions
from maquirent.buisness.rentals.rental_pricing import price_rental
from maquirent.data.collections import CollectionSpec

RENTAL_ENTITY_COLLECTIONS = {
    'machinery': 'machinery',
    'vehicle': 'vehicles',
}


class RecordService:
    """
    Service for collection-specific derived fields.
    """

    @staticmethod
    def prepare_new(store: CollectionStore, spec: CollectionSpec, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fill derived fields of a record about to be added.

        Args:
            store: Store used to look related records up
            spec: Collection the record belongs to
            data: Submitted values

        Returns:
            dict: Record ready for CollectionStore.add

        Raises:
            ValueError: If a rental's dates are invalid
        """
        if spec.name == 'rentals':
            return RecordService.prepare_rental(store, data)
        if spec.name == 'users':
            record = dict(data)
            if not record.get('permissions'):
                record['permissions'] = default_permissions(record.get('role', 'viewer'))
            record.setdefault('isActive', True)
            return record
        return dict(data)

    @staticmethod
    def prepare_rental(store: CollectionStore, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Resolve the rented machinery or vehicle and price the rental.

        Returns:
            dict: Rental with totalAmount, entityName and machineryId or vehicleId
        """
        record = dict(data)
        entity_type = record.get('entityType') or 'machinery'
        entity_id = record.get('entityId')

        entity = None
        collection = RENTAL_ENTITY_COLLECTIONS.get(entity_type)
        if collection and entity_id:
            entity = store.get(collection, entity_id)
            record['machineryId' if entity_type == 'machinery' else 'vehicleId'] = entity_id

        return price_rental(record, entity)
