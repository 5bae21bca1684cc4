from skill_installer.apps.cli.app import app

if __name__ == "__main__":
    app(prog_name="skill-installer")
