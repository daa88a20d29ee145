# keygate/models/record.py
"""
Database model for record store nodes.
Each row is one leaf of the path-addressable record tree, e.g. "keys/ABC-123"
or "applications/default", holding that record's fields as JSON.
"""
from tortoise import fields, models

class Record(models.Model):
    """
    Record store node.

    - path: Slash separated address of the node (primary key)
    - data: Record fields, merged on update
    - updated_at: Last write time (auto-set on save)
    """
    path = fields.CharField(max_length=512, pk=True)
    data = fields.JSONField(default=dict)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "records"

    def __str__(self) -> str:
        return self.path
