from agentdocs.main import cli_main

cli_main()
