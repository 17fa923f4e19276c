from faas.runtime.core import BaseProcessor


class Unexported(BaseProcessor):
    async def validate_input(self, request):
        pass

    async def process(self, request):
        raise NotImplementedError
