class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # Request / business errors
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    NOT_FOUND = "203"
    DUPLICATE_ENTRY = "204"

    # Authentication / authorization
    AUTHENTICATION_CREDENTIALS_INVALID = "300"
    AUTHENTICATION_TOKEN_INVALID = "301"
    AUTHENTICATION_TOKEN_EXPIRED = "302"
    AUTHENTICATION_USER_INVALID = "303"
    AUTHENTICATION_USER_INACTIVE = "304"
    ACCESS_FORBIDDEN = "305"

    INTERNAL_SERVER_ERROR = "500"
