from marshmallow import EXCLUDE, Schema, fields, validate


class CreateProfileSchema(Schema):
    """Self-service sign-up. A client-sent ``role`` is dropped; everyone starts as a student."""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=True)
    avatar_url = fields.Str(load_default=None, allow_none=True, data_key='avatarUrl')


class LoginSchema(Schema):
    email = fields.Email(required=True)
