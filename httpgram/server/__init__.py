from .http import HTTPServer

server_protos = {"http": HTTPServer, "https": HTTPServer}
