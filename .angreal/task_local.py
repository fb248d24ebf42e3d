import angreal # type: ignore
from utils import run_python


local = angreal.command_group(name="local", about="commands for"
                                 " local development environment")



@local()
@angreal.command(name="serve", about="run the inspector web app")
@angreal.argument(name="port", long="port", help="port to listen on (default: 8080)", default_value="8080")
def serve(port="8080"):
    return run_python(["webhook_inspector.app"], env={"PORT": port})


@local()
@angreal.command(name="seed", about="seed the database with Stripe webhooks")
@angreal.argument(name="count", long="count", help="number of records (default: 65)", default_value="65")
@angreal.argument(name="seed", long="seed", help="random seed for reproducible data", required=False)
def seed(count="65", seed=None):
    args = ["webhook_inspector.seed", "--count", count]
    if seed:
        args.extend(["--seed", seed])
    return run_python(args)


@local()
@angreal.command(name="reset", about="drop the webhooks table and reseed it")
@angreal.argument(name="count", long="count", help="number of records (default: 65)", default_value="65")
def reset(count="65"):
    return run_python(["webhook_inspector.seed", "--reset", "--count", count])
