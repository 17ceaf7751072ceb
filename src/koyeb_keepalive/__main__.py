"""Koyeb Keep-Alive 主入口"""

from koyeb_keepalive.run import main


if __name__ == "__main__":
    main()
