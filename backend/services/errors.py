class GatewayError(Exception):
    """Base class for errors that are reported to the caller as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(GatewayError):
    status_code = 400


class MissingCredential(GatewayError):
    def __init__(self, variable: str):
        super().__init__(
            f"{variable} not configured. Set it in the environment, the .env file, "
            f"or ~/.{variable.split('_')[0].lower()}/api_key"
        )
        self.variable = variable


class ProviderAuthError(GatewayError):
    def __init__(self, variable: str):
        super().__init__(f"Invalid API key. Check {variable}.")
        self.variable = variable


class MalformedProviderOutput(GatewayError):
    def __init__(self, detail: str = ""):
        super().__init__("JSON parsing error. Please try again.")
        self.detail = detail


class IncompleteResponse(GatewayError):
    def __init__(self, missing):
        super().__init__(f"Incomplete JSON response from the API (missing: {', '.join(missing)})")
        self.missing = list(missing)


class UnclassifiedProviderError(GatewayError):
    def __init__(self, operation: str, detail: str):
        super().__init__(f"Error during {operation}: {detail}")
        self.operation = operation
        self.detail = detail
