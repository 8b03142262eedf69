from bench import run_bench
import sys

if __name__ == '__main__':
    run_bench(sys.argv[1:])
