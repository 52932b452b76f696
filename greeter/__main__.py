import sys

import greeter.api
import greeter.logstreams

if __name__ == "__main__":  # codecov-skip
    # Log configuration errors before we know the desired log level.
    greeter.logstreams.setup("info")
    cfg, err = greeter.api.compile_server_config()
    if err:
        sys.exit(1)

    try:
        greeter.logstreams.setup(cfg.loglevel)
        err = greeter.api.start_server(cfg)
    except KeyboardInterrupt:
        print("User abort")
        sys.exit(1)
    sys.exit(1 if err else 0)
