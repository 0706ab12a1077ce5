from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)
    filial_id = serializers.UUIDField(required=False, allow_null=True)
