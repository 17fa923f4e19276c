from faas.runtime.core import BaseProcessor, ResponseBuilder


class EchoProcessor(BaseProcessor):
    name = "echo"

    async def validate_input(self, request):
        self.validate_request_body_required(request)

    async def process(self, request):
        return ResponseBuilder.success({"echo": request.body, "method": request.method})


processor = EchoProcessor
