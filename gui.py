import io
import sys
from PyQt5.QtWidgets import (QMainWindow, QAction, qApp, QApplication, QVBoxLayout, QPushButton,
                             QFileDialog, QErrorMessage, QHBoxLayout, QLabel, QWidget, QPlainTextEdit)
from PyQt5.QtGui import QFont
import cell_image
import mapping_reader
from code_tree import CodeTreeError
from translator import Translator


class TranslatorWidget(QMainWindow):
    def __init__(self):
        super().__init__()
        self.tree = None
        self.translator = None
        self.mapping_path = None
        self.braille_edit = None
        self.text_edit = None
        self.initUI()

    def initUI(self):
        exit_action = QAction('Exit', self)
        exit_action.setShortcut('Ctrl+C')
        exit_action.triggered.connect(qApp.quit)

        mapping_action = QAction('Open &alphabet', self)
        mapping_action.setStatusTip('Open braille alphabet')
        mapping_action.triggered.connect(self.openMappingDialog)

        open_action = QAction('&Open braille', self)
        open_action.setStatusTip('Open file written in braille')
        open_action.triggered.connect(self.openBrailleDialog)

        save_action = QAction('&Save text', self)
        save_action.setStatusTip('Append the translation to a file')
        save_action.triggered.connect(self.saveTextDialog)

        export_action = QAction('&Export cells', self)
        export_action.setStatusTip('Save braille cells as a picture')
        export_action.triggered.connect(self.exportCellsDialog)

        info_action = QAction('&Alphabet', self)
        info_action.setStatusTip('Show the loaded alphabet')
        info_action.triggered.connect(self.display_mapping)

        self.statusBar()
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu('&File')
        file_menu.addAction(mapping_action)
        file_menu.addAction(open_action)
        file_menu.addAction(save_action)
        file_menu.addAction(export_action)
        file_menu.addAction(exit_action)

        info_menu = menu_bar.addMenu('&Info')
        info_menu.addAction(info_action)

        self.setGeometry(300, 300, 900, 600)
        self.setWindowTitle('Braille translator')

        self.display_editors()

    def display_editors(self):
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        self.braille_edit, self.text_edit = QPlainTextEdit(self), QPlainTextEdit(self)
        self.braille_edit.setFont(QFont('Monospace', 10))

        decode_button, encode_button = QPushButton('Decode >>', self), QPushButton('<< Encode', self)
        decode_button.clicked.connect(self.decode)
        encode_button.clicked.connect(self.encode)

        buttons = QVBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(decode_button)
        buttons.addWidget(encode_button)
        buttons.addStretch(1)

        hbox = QHBoxLayout()
        hbox.addWidget(self.braille_edit)
        hbox.addLayout(buttons)
        hbox.addWidget(self.text_edit)
        central_widget.setLayout(hbox)

    def openMappingDialog(self):
        fileName = self.__open_dialog("Text Files (*.txt);;All Files (*)")
        if fileName:
            try:
                self.tree = mapping_reader.read_mapping(fileName)
            except (ReferenceError, ValueError) as e:
                self.show_error('Could not read the alphabet: {}'.format(e))
                return
            self.translator = Translator(self.tree)
            self.mapping_path = fileName
            self.statusBar().showMessage('Alphabet: {} characters'.format(len(self.tree)))

    def openBrailleDialog(self):
        fileName = self.__open_dialog("All Files (*);;Text Files (*.txt)")
        if fileName:
            try:
                with open(fileName, 'r', encoding='utf-8') as f:
                    self.braille_edit.setPlainText(f.read())
            except OSError as e:
                self.show_error('Unable to read the file: {}'.format(e))
                return
            self.decode()

    def saveTextDialog(self):
        fileName, _ = QFileDialog.getSaveFileName(self, "Save translation", "", "Text Files (*.txt)")
        if fileName:
            try:
                with open(fileName, 'a', encoding='utf-8') as f:
                    f.write(self.text_edit.toPlainText() + '\n')
            except OSError as e:
                self.show_error('Unable to write the file: {}'.format(e))

    def exportCellsDialog(self):
        if not self.__check_translator():
            return
        fileName, _ = QFileDialog.getSaveFileName(self, "Export cells", "", "PNG Files (*.png)")
        if fileName:
            try:
                codes = list(self.translator.cells(self.braille_edit.toPlainText()))
                cell_image.save_cells(codes, fileName)
            except (CodeTreeError, OSError) as e:
                self.show_error('Unable to export cells: {}'.format(e))

    def decode(self):
        if not self.__check_translator():
            return
        try:
            output = self.translator.decode(io.StringIO(self.braille_edit.toPlainText()))
        except CodeTreeError as e:
            self.show_error(str(e))
            return
        self.text_edit.setPlainText(output.read().rstrip('\n'))

    def encode(self):
        if not self.__check_translator():
            return
        try:
            output = self.translator.encode_stream(io.StringIO(self.text_edit.toPlainText()))
        except CodeTreeError as e:
            self.show_error(str(e))
            return
        self.braille_edit.setPlainText(output.read().rstrip('\n'))

    def display_mapping(self):
        if not self.__check_translator():
            return
        info = MappingWidget(self.tree, self.mapping_path, self)
        info.show()

    def show_error(self, message):
        error_dialog = QErrorMessage(self)
        error_dialog.setWindowTitle('Error')
        error_dialog.showMessage(message)

    def __check_translator(self):
        if self.translator is None:
            self.show_error('Please, open the alphabet first')
            return False
        return True

    def __open_dialog(self, filter_):
        options = QFileDialog.Options()
        options |= QFileDialog.DontUseNativeDialog
        fileName, _ = QFileDialog.getOpenFileName(self, "QFileDialog.getOpenFileName()", "",
                                                  filter_, options=options)
        return fileName


class MappingWidget(QMainWindow):
    def __init__(self, tree, path, parent=None):
        super().__init__(parent)
        self.tree = tree
        self.path = path
        self.text = ''
        self.initUI()

    def initUI(self):
        self.format_text()

        label = QLabel(self.text, self)
        label.setFont(QFont('Monospace', 10))
        self.setCentralWidget(label)

        self.setGeometry(300, 300, 300, 600)
        self.setWindowTitle('Alphabet')

    def format_text(self):
        self.text += 'File: {}\n'.format(self.path)
        self.text += 'Cell width: {}\n'.format(self.tree.width)
        self.text += 'Characters: {}\n\n'.format(len(self.tree))
        self.text += str(self.tree)


if __name__ == '__main__':
    app = QApplication(sys.argv)
    ex = TranslatorWidget()
    ex.show()
    sys.exit(app.exec_())
