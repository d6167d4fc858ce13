"""Simulated make run: two errors, three warnings, make fails."""

import sys
import time

sys.stdout.write(
    "Building file: ../src/hello.cpp\n"
    "Invoking: GCC C++ Compiler\n"
    'g++ -O0 -g3 -Wall -c -fmessage-length=0 -o "src/hello.o" "../src/hello.cpp"\n'
)
sys.stdout.flush()

STDERR_PARTS = [
    "../src/hello.cpp: In function ‘int main()’:\n"
    "../src/hello.cpp:21:9: error: ‘spatule’ was not declared in this scope\n"
    "  return spat",
    "ule;\n"
    "         ^\n"
    "../src/hello.cpp:16:6: warning: unused variable ‘i’ [-Wunused-variable]\n"
    "  int i = 42;\n"
    "      ^\n"
    "../src/hello.cpp: In function ‘int get123()’:\n"
    "../src/hello.cpp:25:14: error: ‘s’ was not declared in this scope\n",
    "  int n = 123;s\n"
    "              ^\n"
    "../src/hello.cpp:25:6: warning: unused variable ‘n’ [-Wunused-variable]\n"
    "  int n = 123;s\n"
    "      ^\n"
    "../src/hello.cpp:27:1: warning: no return statement in function returning non-void [-Wreturn-type]\n"
    " }\n"
    " ^\n",
    "make: *** [src/hello.o] Error 1\n",
]

for part in STDERR_PARTS:
    sys.stderr.write(part)
    sys.stderr.flush()
    time.sleep(0.05)

sys.stdout.write("src/subdir.mk:18: recipe for target 'src/hello.o' failed\n")
sys.stdout.flush()
sys.exit(2)
