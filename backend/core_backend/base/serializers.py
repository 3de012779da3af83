from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer for read models.

    Features:
    - Money fields render as strings (DRF's ``COERCE_DECIMAL_TO_STRING``),
      so clients never receive float amounts
    - ``Meta.read_only = True`` marks every declared field read-only, for
      output-only serializers fed from the service layer
    """

    def get_fields(self):
        fields = super().get_fields()
        if getattr(self.Meta, "read_only", False):
            for field in fields.values():
                field.read_only = True
        return fields
