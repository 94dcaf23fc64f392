import logging
import sys

PACKET_SIZE = 4096
MAX_HEAD_SIZE = 65536
logger = logging.getLogger(__package__)
logger.addHandler(logging.StreamHandler(sys.stdout))
default_ports = {"http": 80, "https": 443}
default_port = 0
