import base64
import binascii
from mimetypes import guess_extension

from django.core.files.base import ContentFile
from rest_framework import serializers


class Base64FileField(serializers.FileField):
    """Accepts `data:<mime>;base64,<payload>` strings as uploaded files."""

    def to_internal_value(self, data):
        if isinstance(data, (str, bytes)):
            if isinstance(data, bytes):
                data = data.decode()
            if ';base64,' not in data:
                self.fail('invalid')
            _format, data_string = data.split(';base64,')
            mime = _format.split(':')[-1]
            ext = guess_extension(mime)
            if not ext:
                # format ~= data:application/X, <<-- Fallback mechanism
                ext = f".{mime.split('/')[-1]}"
            try:
                content = base64.b64decode(data_string, validate=True)
            except (binascii.Error, ValueError):
                self.fail('invalid')
            if not content:
                self.fail('empty')
            data = ContentFile(content, name='document' + ext)
        return super().to_internal_value(data)
