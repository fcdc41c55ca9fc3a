from site_compose.cli import run


if __name__ == '__main__':
    run()
