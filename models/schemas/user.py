from marshmallow import EXCLUDE, Schema, fields


class SignupSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email()
    password = fields.String()
    name = fields.String(allow_none=True, load_default=None)


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String()
    password = fields.String()


class RefreshTokenSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", allow_none=True)


class UserOutSchema(Schema):
    id = fields.String()
    email = fields.String()
    name = fields.String(allow_none=True)
