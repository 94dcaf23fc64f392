import abc

import curio

from .. import gvars
from ..utils import show


class ServerBase(abc.ABC):
    client = None
    client_addr = ("unknown", -1)

    @property
    @abc.abstractmethod
    def proto(self):
        ""

    @abc.abstractmethod
    async def _run(self):
        ""

    @property
    def client_address(self) -> str:
        return show(self.client_addr)

    @property
    def bind_address(self) -> str:
        return show(self.bind_addr)

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"

    def __str__(self):
        return f"{self.client_address} -- {self.proto} -- {self.bind_address}"

    async def __call__(self, client, addr):
        self.client = client
        self.client_addr = addr
        try:
            async with client:
                await self._run()
        except curio.errors.TaskCancelled:
            pass
        except Exception as e:
            gvars.logger.debug(f"{self} {e}")
