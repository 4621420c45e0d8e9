import codecs


class InputStream:
    """Character stream over Java source text; line endings are normalized to '\\n'."""

    def __init__(self, data: str):
        self.name = "<string>"
        self.strdata = data.replace("\r\n", "\n").replace("\r", "\n")
        self.size = len(self.strdata)

    def getText(self, start: int, stop: int) -> str:
        if stop >= self.size:
            stop = self.size - 1
        if start >= self.size:
            return ""
        return self.strdata[start:stop + 1]

    def lines(self):
        # физические строки исходника, нумерация с 1 соответствует индексу + 1;
        # завершающий перевод строки не даёт лишней пустой строки
        lines = self.strdata.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        return lines

    def __str__(self):
        return self.strdata


class FileStream(InputStream):

    def __init__(self, fileName: str, encoding: str = "utf-8", errors: str = "strict"):
        with open(fileName, "rb") as file:
            data = codecs.decode(file.read(), encoding, errors)
        # BOM от редакторов Windows
        if data.startswith("﻿"):
            data = data[1:]
        super().__init__(data)
        self.fileName = fileName
        self.name = fileName
