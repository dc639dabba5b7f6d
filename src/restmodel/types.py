import typing

JSONScalar = typing.Union[bool, int, float, str]
JSONArray = typing.List[typing.Any]
JSONObject = typing.Dict[str, typing.Any]
JSONValue = typing.Union[JSONScalar, JSONArray, JSONObject, None]

Body = JSONObject
"""
The plain mapping representation of a model.
"""
