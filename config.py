# config.py

# Deployment-time configuration for the Coder Runner client.
# Every value can be overridden from the environment before the application starts:
#   CODER_SERVER_URL - Scheme/host/port of the execution service (e.g. "http://localhost:8080").
#   CODER_API_URL    - Base path (or absolute URL) of the REST API. Relative values such as
#                      the default "/api" are resolved against CODER_SERVER_URL.
#   CODER_LOG_LEVEL  - Name of the logging level used by main.py (DEBUG, INFO, WARNING, ...).

import os
from types import MappingProxyType

from PySide6.QtCore import QUrl

SERVER_URL = os.getenv("CODER_SERVER_URL", "http://localhost:8080")
API_BASE_URL = os.getenv("CODER_API_URL") or "/api"
LOG_LEVEL = os.getenv("CODER_LOG_LEVEL", "INFO").upper()

# Limits enforced by the remote execution service. The client only displays them.
EXECUTION_TIME_LIMIT_MS = 30000
MEMORY_LIMIT_BYTES = 1048576

DEFAULT_LANGUAGE_ID = "python"

OFFLINE_ADVISORY = "Failed to connect to server. Using offline mode."
EXECUTION_FAILED_MESSAGE = "Failed to execute code. Please try again."


def endpoint_url(path, base=None, server=None):
    """
    Builds the absolute URL of an API endpoint.

    Args:
        path (str): Endpoint path such as "/languages".
        base (str, optional): API base; defaults to API_BASE_URL.
        server (str, optional): Server used to resolve a relative base; defaults to SERVER_URL.
    """
    base = API_BASE_URL if base is None else base
    server = SERVER_URL if server is None else server
    joined = base.rstrip("/") + "/" + path.lstrip("/")
    return QUrl(server).resolved(QUrl(joined)).toString()


# FALLBACK_LANGUAGES is used when the language catalog cannot be fetched from the server.
# Each key is a language id as understood by the execution service.
# The value is a tuple of (file extension, "hello world" sample source).
# The display name of a fallback language is its capitalized id (e.g. "Cpp").
FALLBACK_LANGUAGES = MappingProxyType({
    "java": (".java", """public class Main {
    public static void main(String[] args) {
        System.out.println("Hello, World!");
    }
}"""),
    "python": (".py", 'print("Hello, World!")'),
    "javascript": (".js", 'console.log("Hello, World!");'),
    "typescript": (".ts", """const greeting: string = "Hello, World!";
console.log(greeting);"""),
    "c": (".c", """#include <stdio.h>

int main() {
    printf("Hello, World!\\n");
    return 0;
}"""),
    "cpp": (".cpp", """#include <iostream>

int main() {
    std::cout << "Hello, World!" << std::endl;
    return 0;
}"""),
    "go": (".go", """package main

import "fmt"

func main() {
    fmt.Println("Hello, World!")
}"""),
    "rust": (".rs", """fn main() {
    println!("Hello, World!");
}"""),
    "ruby": (".rb", 'puts "Hello, World!"'),
    "php": (".php", """<?php
echo "Hello, World!\\n";
?>"""),
    "kotlin": (".kt", """fun main() {
    println("Hello, World!")
}"""),
    "swift": (".swift", 'print("Hello, World!")'),
    "perl": (".pl", 'print "Hello, World!\\n";'),
    "bash": (".sh", '#!/bin/bash\necho "Hello, World!"'),
})
