from hosting.infra.app import build_app


def main():
    build_app().synth()


if __name__ == "__main__":
    main()
