"""
A small HTTP/1.x server built around a recursive-descent request parser.

Each connection is read once (or, with gather=1, up to the blank line),
parsed into a Request and answered by a static router. Requests that do not
parse are logged and dropped, or answered with 400 when reply_errors=1.

uri syntax:

{scheme}://[hostname]:{port}[/?[gather=1][&reply_errors=1]][#{keyfile},{certfile}]

scheme          notes
http            plain tcp
https           tls, key and certificate files are given in the fragment

examples:

# serve on port 8080
httpgram -v http://:8080

# gather heads spanning several reads, answer bad requests with 400
httpgram -vv 'http://127.0.0.1:8080/?gather=1&reply_errors=1'

# parse a request saved to a file
httpgram --parse request.txt
"""
__version__ = "0.1.0"
