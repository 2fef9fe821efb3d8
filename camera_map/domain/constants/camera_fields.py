"""Constants for Camera model field names"""


class CameraFields:
    """Field names of the serialized (client) camera shape"""
    ID = "id"
    NAME = "name"
    TYPE = "type"
    STATUS = "status"
    LOCATION = "location"
    NOTES = "notes"
    LAT = "lat"
    LNG = "lng"
    STATION_ID = "stationId"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class CameraWireFields:
    """Field names of camera documents in the remote store"""
    ID = "id"
    NAME = "name"
    TYPE = "type"
    STATUS = "status"
    LOCATION = "location"
    NOTES = "notes"
    LAT = "lat"
    LNG = "lng"
    STATION_ID = "station_id"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
