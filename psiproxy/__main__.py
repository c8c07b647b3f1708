from psiproxy.cli import main

main()
