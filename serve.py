import asyncio
import logging

from http_server.request import Request
from http_server.response import Response, error_response, response
from http_server.server import HTTPServer
from ledgerkv.config import GatewayConfig
from ledgerkv.contract import ContractDispatcher, KeyValueContract
from ledgerkv.models.exceptions import (
    ContractError,
    DecodingError,
    IntentError,
    InvalidArgumentsError,
    NotFoundError,
    UnknownTransactionError,
)
from ledgerkv.models.memory_state import InMemoryLedgerState

logger = logging.getLogger(__name__)

# HTTP status for each contract failure kind
ERROR_STATUS: dict[type[ContractError], int] = {
    DecodingError: 400,
    InvalidArgumentsError: 400,
    IntentError: 400,
    NotFoundError: 404,
    UnknownTransactionError: 404,
}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_dispatcher(config: GatewayConfig) -> ContractDispatcher:
    contract = KeyValueContract(name=config.contract_name)
    return ContractDispatcher(contract, InMemoryLedgerState())


async def main(config: GatewayConfig | None = None):
    config = config or GatewayConfig.from_env()
    configure_logging(config.log_level)

    server = HTTPServer(config.host, config.port, max_body_bytes=config.max_body_bytes)
    dispatcher = build_dispatcher(config)
    dispatcher.submit("instantiate")

    await register_routes(server, dispatcher)
    logger.debug(f"Registered routes: {sorted(server.routes)}")
    await server.start()


def _read_invocation(request: Request) -> tuple[str, list[str]] | Response:
    # The invocation lives in the JSON body only; query parameters are ignored
    if not request.has_json_object():
        return error_response(400, "Request body must be a JSON object")

    invocation = request.json
    function = invocation.get("function")
    args = invocation.get("args", [])

    if not function or not isinstance(function, str):
        return error_response(400, "Missing 'function' in request body")

    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        return error_response(400, "'args' must be an array of strings")

    return function, args


async def register_routes(server: HTTPServer, dispatcher: ContractDispatcher):

    @server.error_handler(ContractError)
    def contract_error(exc: ContractError) -> Response:
        status = 500
        for klass in type(exc).__mro__:
            if klass in ERROR_STATUS:
                status = ERROR_STATUS[klass]
                break
        return error_response(status, exc.message, exc.code)

    @server.route('/contract', ['GET'])
    async def metadata(request: Request) -> Response:
        return response(status_code=200).json(dispatcher.metadata())

    @server.route('/transactions/submit', ['POST'])
    async def submit(request: Request) -> Response:
        invocation = _read_invocation(request)
        if isinstance(invocation, Response):
            return invocation

        function, args = invocation
        payload = dispatcher.submit(function, *args)
        return response(status_code=200).json({"payload": payload})

    @server.route('/transactions/evaluate', ['POST'])
    async def evaluate(request: Request) -> Response:
        invocation = _read_invocation(request)
        if isinstance(invocation, Response):
            return invocation

        function, args = invocation
        payload = dispatcher.evaluate(function, *args)
        return response(status_code=200).json({"payload": payload})


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
